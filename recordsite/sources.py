r"""Fetch item records from JSON data sources.

Each configured source is either an HTTP(S) URL or a local JSON file. A JSON
array contributes its elements as items; any other JSON document contributes
itself as a single item. Sources are fetched in configured order and every
result is collected before the generator starts templating.

Example
-------
>>> from recordsite.sources import DataSourceClient
>>> client = DataSourceClient(timeout=5)  # doctest: +SKIP
>>> items = client.fetch_all(["https://example.com/games.json"])  # doctest: +SKIP
>>> items[0]["title"]  # doctest: +SKIP
'Space Harrier'
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path
from urllib.parse import urlsplit

import msgspec
import msgspec.json as msgspec_json
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http", "https")


class DataSourceError(RuntimeError):
    """Raised when a data source cannot be read or decoded."""


class DataSourceClient:
    """Read item records from URLs and local JSON files."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialise the client with an optional preconfigured session.

        Parameters
        ----------
        session : requests.Session, optional
            Session reused for every HTTP source. Defaults to a new session
            mounted with a retrying adapter.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``30.0``.
        """
        self._session = session or _build_session()
        self.timeout = timeout

    def fetch_all(self, sources: cabc.Iterable[str]) -> list[typ.Any]:
        """Return the items of every source, concatenated in source order.

        Raises
        ------
        DataSourceError
            If any source cannot be fetched or is not valid JSON.
        """
        items: list[typ.Any] = []
        for source in sources:
            payload = self.fetch(source)
            if isinstance(payload, list):
                items.extend(payload)
            else:
                items.append(payload)
            logger.info("Loaded %s", source)
        return items

    def fetch(self, source: str) -> typ.Any:
        """Return the decoded JSON document at ``source``."""
        if urlsplit(source).scheme in REMOTE_SCHEMES:
            raw = self._fetch_remote(source)
        else:
            raw = self._read_local(Path(source))
        try:
            return msgspec_json.decode(raw)
        except msgspec.DecodeError as exc:
            msg = f"Data source '{source}' is not valid JSON: {exc}"
            raise DataSourceError(msg) from exc

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self._session.close()

    def _fetch_remote(self, url: str) -> bytes:
        try:
            resp = self._session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            msg = f"Failed to fetch data source '{url}': {exc}"
            raise DataSourceError(msg) from exc
        return resp.content

    @staticmethod
    def _read_local(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            msg = f"Failed to read data source '{path}': {exc}"
            raise DataSourceError(msg) from exc


def _build_session() -> requests.Session:
    """Return a session that retries idempotent requests on server errors."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


__all__ = ["DataSourceClient", "DataSourceError"]
