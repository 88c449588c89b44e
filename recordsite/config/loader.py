"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_site_metadata,
    _optional_str,
    _parse_data_sources,
    _parse_filename_pattern,
    _parse_flag,
    _parse_items_per_page,
    _parse_positive,
    _parse_taxonomies,
    _parse_url_style,
    _parse_workers,
    _resolve_path,
)
from .models import SiteConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing data sources, theme, and layout.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``site.yaml``). Relative paths inside the file resolve against its
        directory.

    Returns
    -------
    SiteConfig
        Parsed and validated site configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields are missing or any option is invalid (for example,
        a negative ``items_per_page`` or an unknown ``url_style``).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from recordsite.config import load_site_config
    >>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> config.taxonomies  # doctest: +SKIP
    ['genres', 'tags']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    root = path.resolve().parent

    return SiteConfig(
        site=_build_site_metadata(raw.get("site")),
        data_sources=_parse_data_sources(raw.get("data"), root),
        theme=_optional_str(raw.get("theme")) or "default",
        themes_dir=_resolve_path(raw.get("themes_dir"), "themes", root),
        output_dir=_resolve_path(raw.get("output_dir"), "public", root),
        items_per_page=_parse_items_per_page(raw.get("items_per_page")),
        url_style=typ.cast("typ.Any", _parse_url_style(raw.get("url_style"))),
        filename_pattern=_parse_filename_pattern(raw.get("filename_pattern")),
        taxonomies=_parse_taxonomies(raw.get("taxonomies")),
        dedupe_term_items=_parse_flag(raw.get("dedupe_term_items"), "dedupe_term_items"),
        emit_empty_listings=_parse_flag(
            raw.get("emit_empty_listings"), "emit_empty_listings"
        ),
        workers=_parse_workers(raw.get("workers")),
        request_timeout=float(
            _parse_positive(raw.get("request_timeout"), "request_timeout", 30.0)
        ),
    )


__all__ = ["load_site_config"]
