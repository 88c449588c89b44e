"""Utility helpers shared by the recordsite configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from urllib.parse import urlsplit

from recordsite._constants import DEFAULT_FILENAME_PATTERN, PAGE_TOKEN
from recordsite.paths import URL_STYLES

from .models import SiteConfigError, SiteMetadata

REMOTE_SCHEMES = ("http", "https")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: object, default: str, root: Path) -> Path:
    """Return ``value`` as a path, relative entries anchored at ``root``."""
    path = Path(_optional_str(value) or default).expanduser()
    return path if path.is_absolute() else root / path


def _build_site_metadata(payload: object) -> SiteMetadata:
    """Build SiteMetadata from the ``site`` mapping, keeping unknown keys."""
    if payload is None:
        return SiteMetadata()
    if not isinstance(payload, dict):
        msg = "'site' must be a mapping."
        raise SiteConfigError(msg)
    base = SiteMetadata()
    known = {"title", "base_url", "description"}
    return SiteMetadata(
        title=_optional_str(payload.get("title")) or base.title,
        base_url=_optional_str(payload.get("base_url")) or base.base_url,
        description=_optional_str(payload.get("description")) or base.description,
        extra={key: value for key, value in payload.items() if key not in known},
    )


def _parse_data_sources(value: object, root: Path) -> list[str]:
    """Return data source URLs and absolute file paths in configured order."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        msg = "'data' must list at least one URL or file path."
        raise SiteConfigError(msg)
    sources: list[str] = []
    for entry in value:
        text = _optional_str(entry)
        if text is None:
            msg = f"Empty data source entry in {value!r}."
            raise SiteConfigError(msg)
        if urlsplit(text).scheme in REMOTE_SCHEMES:
            sources.append(text)
        else:
            sources.append(str(_resolve_path(text, ".", root)))
    return sources


def _parse_items_per_page(value: object) -> int | None:
    """Return a positive page size, or None when pagination is disabled."""
    match value:
        case None | False:
            return None
        case bool():
            msg = "'items_per_page' must be an integer, not true."
            raise SiteConfigError(msg)
        case int() if value > 0:
            return value
        case 0:
            return None
        case _:
            msg = f"'items_per_page' must be a positive integer or 0/null, got {value!r}."
            raise SiteConfigError(msg)


def _parse_url_style(value: object) -> str:
    """Return a validated URL style name."""
    style = (_optional_str(value) or "flat").lower()
    if style not in URL_STYLES:
        msg = f"'url_style' must be one of {', '.join(URL_STYLES)}, got {value!r}."
        raise SiteConfigError(msg)
    return style


def _parse_filename_pattern(value: object) -> str:
    """Return a filename pattern containing exactly one page token."""
    pattern = _optional_str(value) or DEFAULT_FILENAME_PATTERN
    if pattern.count(PAGE_TOKEN) != 1:
        msg = f"'filename_pattern' must contain {PAGE_TOKEN} exactly once, got {pattern!r}."
        raise SiteConfigError(msg)
    return pattern


def _parse_taxonomies(value: object) -> list[str]:
    """Return the taxonomy names to process, rejecting anything but names."""
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"'taxonomies' must be a list of attribute names, got {value!r}."
        raise SiteConfigError(msg)
    names: list[str] = []
    for entry in value:
        name = _optional_str(entry) if isinstance(entry, str) else None
        if name is None:
            msg = f"Invalid taxonomy name {entry!r}."
            raise SiteConfigError(msg)
        if name in names:
            msg = f"Taxonomy {name!r} is listed more than once."
            raise SiteConfigError(msg)
        names.append(name)
    return names


def _parse_positive(value: object, key: str, default: float) -> typ.Any:
    """Return a positive number for ``key`` or raise SiteConfigError."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        msg = f"'{key}' must be a positive number, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _parse_workers(value: object) -> int:
    """Return a positive whole worker count, defaulting to 1."""
    match value:
        case None:
            return 1
        case int() if not isinstance(value, bool) and value > 0:
            return value
        case _:
            msg = f"'workers' must be a positive integer, got {value!r}."
            raise SiteConfigError(msg)


def _parse_flag(value: object, key: str) -> bool:
    """Return a boolean option, rejecting non-boolean YAML values."""
    if value is None:
        return False
    if not isinstance(value, bool):
        msg = f"'{key}' must be true or false, got {value!r}."
        raise SiteConfigError(msg)
    return value


__all__ = [
    "_build_site_metadata",
    "_optional_str",
    "_parse_data_sources",
    "_parse_filename_pattern",
    "_parse_flag",
    "_parse_items_per_page",
    "_parse_positive",
    "_parse_taxonomies",
    "_parse_url_style",
    "_parse_workers",
    "_resolve_path",
]
