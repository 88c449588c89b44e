"""Typed dataclasses describing recordsite configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from recordsite._constants import DEFAULT_FILENAME_PATTERN

if typ.TYPE_CHECKING:
    from recordsite.paths import UrlStyle


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteMetadata:
    """Site-wide values exposed to every template as ``site``."""

    title: str = "Untitled Site"
    base_url: str = "/"
    description: str = ""
    extra: dict[str, typ.Any] = dc.field(default_factory=dict)

    def as_context(self) -> dict[str, typ.Any]:
        """Return the template mapping, extra keys first so named fields win."""
        return {
            **self.extra,
            "title": self.title,
            "base_url": self.base_url,
            "description": self.description,
        }


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved site definition sourced from YAML config.

    Attributes
    ----------
    site : SiteMetadata
        Title, base URL, and free-form values exposed to templates.
    data_sources : list[str]
        URLs or resolved file paths supplying item records, in order.
    theme : str
        Theme directory name under ``themes_dir``.
    themes_dir : Path
        Directory containing theme folders.
    output_dir : Path
        Directory the rendered site is written to.
    items_per_page : int or None
        Listing page size; ``None`` disables pagination.
    url_style : {"flat", "clean"}
        Output layout for routes.
    filename_pattern : str
        Name of pages after the first, with one ``{page}`` token.
    taxonomies : list[str]
        Item attributes grouped into taxonomy pages.
    dedupe_term_items : bool
        Skip an item repeated back-to-back within one term.
    emit_empty_listings : bool
        Write one empty listing page when a listing has no items.
    workers : int
        Threads used to render and write pages once slugs are assigned.
    request_timeout : float
        Per-request timeout for HTTP data sources, in seconds.
    """

    site: SiteMetadata
    data_sources: list[str]
    theme: str = "default"
    themes_dir: Path = Path("themes")
    output_dir: Path = Path("public")
    items_per_page: int | None = None
    url_style: UrlStyle = "flat"
    filename_pattern: str = DEFAULT_FILENAME_PATTERN
    taxonomies: list[str] = dc.field(default_factory=list)
    dedupe_term_items: bool = False
    emit_empty_listings: bool = False
    workers: int = 1
    request_timeout: float = 30.0

    @property
    def theme_dir(self) -> Path:
        """Return the directory holding the selected theme's templates."""
        return self.themes_dir / self.theme


__all__ = ["SiteConfig", "SiteConfigError", "SiteMetadata"]
