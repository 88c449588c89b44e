"""Shared dataclasses used by the site generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from recordsite.paths import Route


@dc.dataclass(slots=True)
class PageLink:
    """One entry of a pagination page-number strip."""

    number: int
    url: str
    is_current: bool


@dc.dataclass(slots=True)
class Pagination:
    """Navigation metadata for one page of a listing.

    Attributes
    ----------
    current_page : int
        1-based page number.
    total_pages : int
        Number of pages in the listing.
    items : list[typ.Any]
        Items shown on this page.
    has_previous : bool
        ``True`` unless this is the first page.
    has_next : bool
        ``True`` unless this is the last page.
    previous_url : str
        Link to the previous page, or ``""``.
    next_url : str
        Link to the next page, or ``""``.
    first_url : str
        Link to page 1 of the listing.
    pages : list[PageLink]
        Ordered page-number strip covering every page.
    """

    current_page: int
    total_pages: int
    items: list[typ.Any]
    has_previous: bool
    has_next: bool
    previous_url: str
    next_url: str
    first_url: str
    pages: list[PageLink]

    @property
    def page_numbers(self) -> list[int]:
        """Return the page numbers in strip order."""
        return [link.number for link in self.pages]

    def as_context(self) -> dict[str, typ.Any]:
        """Return a template-ready mapping for this pagination state."""
        context = dc.asdict(self)
        context["page_numbers"] = self.page_numbers
        return context


@dc.dataclass(slots=True)
class Page:
    """A unit of output: template, data context, route, and output path."""

    template: str
    context: dict[str, typ.Any]
    route: Route
    output_path: str
    pagination: Pagination | None = None


@dc.dataclass(slots=True)
class Term:
    """One value within a taxonomy and the items tagged with it.

    Attributes
    ----------
    name : str
        Display name taken from the first reference seen.
    slug : str
        Identifier unique within the taxonomy.
    taxonomy : str
        Name of the owning taxonomy.
    items : list[typ.Any]
        Referencing items in first-seen order.
    """

    name: str
    slug: str
    taxonomy: str
    items: list[typ.Any] = dc.field(default_factory=list)

    @property
    def count(self) -> int:
        """Return the number of item references recorded for the term."""
        return len(self.items)


@dc.dataclass(slots=True)
class PageFailure:
    """A page or record that could not be produced during a run."""

    label: str
    reason: str


@dc.dataclass(slots=True)
class GenerationReport:
    """Outcome of a generation run."""

    written: list[Path] = dc.field(default_factory=list)
    failures: list[PageFailure] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no page or record failed."""
        return not self.failures


__all__ = [
    "GenerationReport",
    "Page",
    "PageFailure",
    "PageLink",
    "Pagination",
    "Term",
]
