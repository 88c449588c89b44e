"""Slice ordered item lists into listing pages with navigation metadata.

Example
-------
>>> from recordsite.generator.pagination import plan_pages
>>> from recordsite.paths import PathResolver, Route
>>> pages = plan_pages(list(range(1, 26)), 10, Route(), PathResolver("flat"))
>>> [len(page.pagination.items) for page in pages]
[10, 10, 5]
>>> [page.output_path for page in pages]
['index.html', 'page-2.html', 'page-3.html']
"""

from __future__ import annotations

import math
import typing as typ

from .models import Page, PageLink, Pagination

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from recordsite.paths import PathResolver, Route


def count_pages(item_count: int, items_per_page: int | None) -> int:
    """Return the number of pages needed for ``item_count`` items.

    A disabled page size (``None`` or ``<= 0``) yields a single page for any
    non-empty list; an empty list always yields zero pages.
    """
    if item_count <= 0:
        return 0
    if not items_per_page or items_per_page <= 0:
        return 1
    return math.ceil(item_count / items_per_page)


def plan_pages(
    items: cabc.Sequence[typ.Any],
    items_per_page: int | None,
    route_base: Route,
    paths: PathResolver,
    *,
    template: str = "list",
    context: cabc.Mapping[str, typ.Any] | None = None,
    emit_empty: bool = False,
) -> list[Page]:
    """Plan the listing pages for ``items`` under ``route_base``.

    Parameters
    ----------
    items : Sequence[Any]
        Ordered items to spread over the listing.
    items_per_page : int or None
        Page size; ``None`` or a value ``<= 0`` keeps every item on one page.
    route_base : Route
        Route of the listing's first page.
    paths : PathResolver
        Resolver used for output paths and navigation links.
    template : str, optional
        Theme template each page renders with. Defaults to ``"list"``.
    context : Mapping[str, Any], optional
        Extra fields merged into every page context.
    emit_empty : bool, optional
        When ``True`` an empty ``items`` still produces one empty page.

    Returns
    -------
    list[Page]
        One page per page number, in order. Each context carries ``items``
        and ``pagination``.
    """
    total = count_pages(len(items), items_per_page)
    if total == 0 and emit_empty:
        total = 1
    if items_per_page and items_per_page > 0:
        size = items_per_page
    else:
        size = max(len(items), 1)
    urls = [paths.url(route_base.with_page(number)) for number in range(1, total + 1)]

    pages: list[Page] = []
    for number in range(1, total + 1):
        page_items = list(items[(number - 1) * size : number * size])
        pagination = Pagination(
            current_page=number,
            total_pages=total,
            items=page_items,
            has_previous=number > 1,
            has_next=number < total,
            previous_url=urls[number - 2] if number > 1 else "",
            next_url=urls[number] if number < total else "",
            first_url=urls[0],
            pages=[
                PageLink(number=index, url=url, is_current=index == number)
                for index, url in enumerate(urls, start=1)
            ],
        )
        route = route_base.with_page(number)
        page_context = dict(context or {})
        page_context["items"] = page_items
        page_context["pagination"] = pagination.as_context()
        pages.append(
            Page(
                template=template,
                context=page_context,
                route=route,
                output_path=paths.path(route),
                pagination=pagination,
            )
        )
    return pages


__all__ = ["count_pages", "plan_pages"]
