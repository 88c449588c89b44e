"""Map logical routes onto output paths and links.

A :class:`Route` is a list of slug segments plus a page number. The resolver
turns it into the relative file path the storage collaborator writes to and
the link other pages use to reach it. Page 1 of a route always resolves to the
route's index form; later pages resolve to the page-numbered form built from
the configured filename pattern.

Example
-------
>>> from recordsite.paths import PathResolver, Route
>>> clean = PathResolver("clean")
>>> clean.path(Route(("games",)))
'games/index.html'
>>> clean.path(Route(("games",), page=2))
'games/page-2/index.html'
>>> PathResolver("flat").path(Route(("games",), page=2))
'games-page-2.html'
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ

from ._constants import DEFAULT_FILENAME_PATTERN, INDEX_FILENAME, PAGE_TOKEN

UrlStyle = typ.Literal["flat", "clean"]
URL_STYLES: tuple[str, ...] = typ.get_args(UrlStyle)


@dc.dataclass(frozen=True, slots=True)
class Route:
    """Environment-independent position of a page within the site.

    Attributes
    ----------
    segments : tuple[str, ...]
        Slug segments, outermost first. An empty tuple is the site root.
    page : int
        1-based page number for paginated listings.
    """

    segments: tuple[str, ...] = ()
    page: int = 1

    def with_page(self, page: int) -> Route:
        """Return the same route positioned on ``page``."""
        return dc.replace(self, page=page)


def resolve_path(
    route: Route,
    url_style: UrlStyle,
    filename_pattern: str = DEFAULT_FILENAME_PATTERN,
) -> str:
    """Return the relative output path for ``route`` under ``url_style``.

    Parameters
    ----------
    route : Route
        Logical route to resolve.
    url_style : {"flat", "clean"}
        ``flat`` writes ``segment.html`` files; ``clean`` writes
        ``segment/index.html`` directories.
    filename_pattern : str, optional
        Name used for pages after the first; must contain ``{page}``.

    Returns
    -------
    str
        POSIX-style relative path. Nothing is created on disk.
    """
    segments = list(route.segments)
    page_name = _page_name(route.page, filename_pattern)
    if url_style == "clean":
        if page_name:
            segments.append(page_name)
        return posixpath.join(*segments, INDEX_FILENAME)
    if url_style != "flat":
        msg = f"Unknown URL style {url_style!r}; expected one of {URL_STYLES}."
        raise ValueError(msg)
    if not segments:
        return f"{page_name}.html" if page_name else INDEX_FILENAME
    leaf = segments.pop()
    if page_name:
        leaf = f"{leaf}-{page_name}"
    return posixpath.join(*segments, f"{leaf}.html")


def resolve_link(
    route: Route,
    url_style: UrlStyle,
    filename_pattern: str = DEFAULT_FILENAME_PATTERN,
    base_url: str = "/",
) -> str:
    """Return the link for ``route``, prefixed with ``base_url``.

    Clean links point at the directory with a trailing slash; flat links point
    at the file itself.
    """
    path = resolve_path(route, url_style, filename_pattern)
    if url_style == "clean":
        directory = posixpath.dirname(path)
        relative = f"{directory}/" if directory else ""
    else:
        relative = path
    prefix = base_url if base_url.endswith("/") else f"{base_url}/"
    return f"{prefix}{relative}"


def _page_name(page: int, filename_pattern: str) -> str:
    """Return the page-numbered name for ``page``, or ``""`` for page 1."""
    if page < 1:
        msg = f"Page numbers start at 1, got {page}."
        raise ValueError(msg)
    if page == 1:
        return ""
    return filename_pattern.replace(PAGE_TOKEN, str(page))


class PathResolver:
    """Resolve routes using one URL style, filename pattern, and base URL."""

    def __init__(
        self,
        url_style: UrlStyle = "flat",
        *,
        filename_pattern: str = DEFAULT_FILENAME_PATTERN,
        base_url: str = "/",
    ) -> None:
        if url_style not in URL_STYLES:
            msg = f"Unknown URL style {url_style!r}; expected one of {URL_STYLES}."
            raise ValueError(msg)
        if filename_pattern.count(PAGE_TOKEN) != 1:
            msg = f"Filename pattern {filename_pattern!r} must contain {PAGE_TOKEN} once."
            raise ValueError(msg)
        self.url_style: UrlStyle = url_style
        self.filename_pattern = filename_pattern
        self.base_url = base_url

    def path(self, route: Route) -> str:
        """Return the relative output path for ``route``."""
        return resolve_path(route, self.url_style, self.filename_pattern)

    def url(self, route: Route) -> str:
        """Return the base-URL-prefixed link for ``route``."""
        return resolve_link(
            route, self.url_style, self.filename_pattern, self.base_url
        )

    def leaf_name(self, route: Route) -> str:
        """Return the name ``route`` occupies beside its sibling routes.

        This is the path component directly below the route's parent
        segments, without ``.html``. Sibling slugs must not reuse it, so item
        slugs stay clear of root listing pages and term slugs stay clear of
        other terms' numbered pages.

        Examples
        --------
        >>> PathResolver("flat").leaf_name(Route(("genres", "action"), page=2))
        'action-page-2'
        >>> PathResolver("clean").leaf_name(Route(("genres", "action"), page=2))
        'action'
        """
        depth = max(len(route.segments) - 1, 0)
        component = self.path(route).split("/")[depth]
        return component.removesuffix(".html")


__all__ = [
    "URL_STYLES",
    "PathResolver",
    "Route",
    "UrlStyle",
    "resolve_link",
    "resolve_path",
]
