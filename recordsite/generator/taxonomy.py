"""Group items into taxonomy terms and plan the term listing pages.

A taxonomy is an item attribute holding a list of term references, either
plain labels (``"retro"``) or mappings with a ``name`` (``{"name": "Retro"}``).
:class:`TaxonomyIndexer` collects the terms of each configured taxonomy in
first-seen order, gives each term a slug unique within its taxonomy, and plans
one paginated listing per term plus a terms index page per taxonomy.

Example
-------
>>> from recordsite.generator.taxonomy import index_taxonomies
>>> items = [{"genres": ["action", "retro"]}, {"genres": ["retro"]}]
>>> terms = index_taxonomies(items, ["genres"])["genres"]
>>> [(slug, term.count) for slug, term in terms.items()]
[('action', 1), ('retro', 2)]
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from recordsite.paths import Route
from recordsite.slugs import SlugRegistry

from .models import Page, Term
from .pagination import count_pages, plan_pages

if typ.TYPE_CHECKING:
    from recordsite.paths import PathResolver

logger = logging.getLogger(__name__)

TaxonomyIndex = dict[str, dict[str, Term]]


def term_name(entry: object) -> str | None:
    """Return the display name for a term reference, or ``None`` if unusable.

    Examples
    --------
    >>> term_name("retro"), term_name({"name": "Retro"}), term_name({"id": 4})
    ('retro', 'Retro', None)
    """
    match entry:
        case str():
            name = entry
        case cabc.Mapping():
            raw = typ.cast("cabc.Mapping[str, typ.Any]", entry).get("name")
            name = raw if isinstance(raw, str) else None
        case bool():
            name = None
        case int() | float():
            name = str(entry)
        case _:
            name = None
    if name is None:
        return None
    return name.strip() or None


def index_taxonomies(
    items: cabc.Sequence[typ.Any],
    taxonomy_names: cabc.Iterable[str],
    *,
    dedupe: bool = False,
) -> TaxonomyIndex:
    """Group ``items`` into terms for every name in ``taxonomy_names``.

    Parameters
    ----------
    items : Sequence[Any]
        Items in the order they were supplied. Non-mapping entries are
        skipped.
    taxonomy_names : Iterable[str]
        Attributes to group by.
    dedupe : bool, optional
        When ``True`` an item is not appended to a term whose most recently
        appended item is that same item. By default every reference is kept.

    Returns
    -------
    dict[str, dict[str, Term]]
        Taxonomy name to an insertion-ordered mapping of term slug to term.
    """
    index: TaxonomyIndex = {}
    for taxonomy in taxonomy_names:
        registry = SlugRegistry()
        by_key: dict[str, Term] = {}
        terms: dict[str, Term] = {}
        for position, item in enumerate(items):
            if not isinstance(item, cabc.Mapping):
                continue
            references = item.get(taxonomy)
            if references is None:
                continue
            if not isinstance(references, (list, tuple)):
                logger.warning(
                    "Item %d has a non-list %r value (%s); skipping it for this taxonomy",
                    position,
                    taxonomy,
                    type(references).__name__,
                )
                continue
            for entry in references:
                name = term_name(entry)
                if name is None:
                    logger.warning(
                        "Item %d has an unusable %r reference %r", position, taxonomy, entry
                    )
                    continue
                key = name.casefold()
                term = by_key.get(key)
                if term is None:
                    term = Term(name=name, slug=registry.assign(name), taxonomy=taxonomy)
                    by_key[key] = term
                    terms[term.slug] = term
                if dedupe and term.items and term.items[-1] is item:
                    continue
                term.items.append(item)
        index[taxonomy] = terms
    return index


class TaxonomyIndexer:
    """Index taxonomies and plan their term and terms-index pages."""

    def __init__(
        self,
        paths: PathResolver,
        *,
        items_per_page: int | None = None,
        dedupe: bool = False,
        emit_empty: bool = False,
    ) -> None:
        self.paths = paths
        self.items_per_page = items_per_page
        self.dedupe = dedupe
        self.emit_empty = emit_empty

    def index(
        self, items: cabc.Sequence[typ.Any], taxonomy_names: cabc.Iterable[str]
    ) -> TaxonomyIndex:
        """Group ``items`` by every taxonomy in ``taxonomy_names``.

        Term slugs are then moved off any name another term's numbered pages
        resolve to, so every planned page has its own output path.
        """
        index = index_taxonomies(items, taxonomy_names, dedupe=self.dedupe)
        return {
            taxonomy: self._separate_page_names(terms)
            for taxonomy, terms in index.items()
        }

    def _separate_page_names(self, terms: dict[str, Term]) -> dict[str, Term]:
        """Re-slug terms whose page 1 lands on another term's numbered page."""
        while True:
            paged: dict[str, str] = {}
            for term in terms.values():
                pages = count_pages(term.count, self.items_per_page)
                for number in range(2, pages + 1):
                    leaf = self.paths.leaf_name(Route((term.slug,), page=number))
                    paged[leaf] = term.slug
            clashing = [
                term
                for term in terms.values()
                if paged.get(term.slug, term.slug) != term.slug
            ]
            if not clashing:
                return terms
            registry = SlugRegistry([*terms, *paged])
            for term in clashing:
                old_slug = term.slug
                term.slug = registry.assign(term.name)
                logger.info(
                    "Term %r in %r renamed %r -> %r; %r is a numbered page name",
                    term.name,
                    term.taxonomy,
                    old_slug,
                    term.slug,
                    old_slug,
                )
            terms = {term.slug: term for term in terms.values()}

    def plan(
        self,
        index: TaxonomyIndex,
        taxonomy_slugs: cabc.Mapping[str, str],
        *,
        context: cabc.Mapping[str, typ.Any] | None = None,
    ) -> list[Page]:
        """Plan term listings and the terms index page for each taxonomy.

        Parameters
        ----------
        index : dict[str, dict[str, Term]]
            Result of :meth:`index`.
        taxonomy_slugs : Mapping[str, str]
            Route segment used for each taxonomy name.
        context : Mapping[str, Any], optional
            Shared fields merged into every page context.

        Returns
        -------
        list[Page]
            For each taxonomy: the pages of every term (``taxonomy`` template)
            followed by its terms index (``terms`` template). A taxonomy with
            no terms is skipped unless empty listings are emitted.
        """
        shared = dict(context or {})
        pages: list[Page] = []
        for taxonomy, terms in index.items():
            if not terms and not self.emit_empty:
                logger.info("Taxonomy %r has no terms; skipping its pages", taxonomy)
                continue
            base = Route((taxonomy_slugs[taxonomy],))
            summary = {"name": taxonomy, "slug": base.segments[0], "url": self.paths.url(base)}
            term_rows: list[dict[str, typ.Any]] = []
            for term in terms.values():
                route = Route((*base.segments, term.slug))
                row = {
                    "name": term.name,
                    "slug": term.slug,
                    "count": term.count,
                    "url": self.paths.url(route),
                }
                term_rows.append(row)
                term_pages = plan_pages(
                    term.items,
                    self.items_per_page,
                    route,
                    self.paths,
                    template="taxonomy",
                    context={**shared, "taxonomy": summary, "term": row},
                    emit_empty=self.emit_empty,
                )
                pages.extend(term_pages)
            terms_context = {**shared, "taxonomy": summary, "terms": term_rows}
            pages.append(
                Page(
                    template="terms",
                    context=terms_context,
                    route=base,
                    output_path=self.paths.path(base),
                )
            )
            logger.debug("Planned %d terms for taxonomy %r", len(term_rows), taxonomy)
        return pages


__all__ = ["TaxonomyIndex", "TaxonomyIndexer", "index_taxonomies", "term_name"]
