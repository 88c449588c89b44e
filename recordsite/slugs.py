r"""Assign normalized, collision-free slugs to record and term labels.

Slugs double as route segments, so every slug handed out for one scope must be
unique within that scope. :class:`SlugRegistry` tracks the slugs already
assigned during a single generation run and serializes assignments behind a
lock; :func:`assign_slug` performs the normalization and uniqueness steps.

Example
-------
>>> from recordsite.slugs import SlugRegistry, assign_slug
>>> registry = SlugRegistry()
>>> assign_slug("  Hello   World!! ", registry)
'hello-world'
>>> assign_slug("cats", registry), assign_slug("cats", registry)
('cats', 'cats-2')
"""

from __future__ import annotations

import re
import threading
import typing as typ
import unicodedata

from ._constants import SLUG_FALLBACK, SLUG_MAX_LENGTH, SLUG_MIN_LENGTH, SLUG_PAD_CHAR

if typ.TYPE_CHECKING:
    import collections.abc as cabc

WHITESPACE_PATTERN = re.compile(r"\s+")
DISALLOWED_PATTERN = re.compile(r"[^\w-]")
HYPHEN_RUN_PATTERN = re.compile(r"-{2,}")


class SlugRegistry:
    """Slugs already assigned within one scope of one generation run.

    A registry must never be shared between independent runs. Use one registry
    for item pages and a fresh one per taxonomy so terms in different
    taxonomies may reuse the same slug.
    """

    def __init__(self, reserved: cabc.Iterable[str] = ()) -> None:
        self._assigned: set[str] = set(reserved)
        self._lock = threading.Lock()

    def __contains__(self, slug: object) -> bool:
        return slug in self._assigned

    def __len__(self) -> int:
        return len(self._assigned)

    def reserve(self, slug: str) -> None:
        """Mark ``slug`` as taken without running it through normalization."""
        with self._lock:
            self._assigned.add(slug)

    def assign(self, raw_label: object) -> str:
        """Return a unique slug for ``raw_label`` and record it as taken."""
        candidate = normalize_slug(raw_label)
        with self._lock:
            slug = _first_unused(candidate, self._assigned)
            self._assigned.add(slug)
        return slug


def assign_slug(raw_label: object, registry: SlugRegistry) -> str:
    """Assign a unique slug for ``raw_label`` within ``registry``.

    Parameters
    ----------
    raw_label : object
        Human-readable label; non-string values are converted with ``str``.
    registry : SlugRegistry
        Registry for the scope the slug must be unique in. It is mutated.

    Returns
    -------
    str
        Slug between 2 and 30 characters long that was not present in
        ``registry`` before the call.
    """
    return registry.assign(raw_label)


def normalize_slug(raw_label: object) -> str:
    """Normalize ``raw_label`` into a slug candidate without uniqueness checks.

    Examples
    --------
    >>> normalize_slug("Café Society")
    'cafe-society'
    >>> normalize_slug("x")
    'x0'
    >>> normalize_slug("!!!")
    'untitled'
    """
    text = "" if raw_label is None else str(raw_label)
    decomposed = unicodedata.normalize("NFKD", text.lower())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    slug = WHITESPACE_PATTERN.sub("-", stripped)
    slug = DISALLOWED_PATTERN.sub("", slug)
    slug = HYPHEN_RUN_PATTERN.sub("-", slug).strip("-")
    if not slug:
        slug = SLUG_FALLBACK
    if len(slug) < SLUG_MIN_LENGTH:
        slug = slug.ljust(SLUG_MIN_LENGTH, SLUG_PAD_CHAR)
    if len(slug) > SLUG_MAX_LENGTH:
        slug = slug[:SLUG_MAX_LENGTH].rstrip("-")
    return slug


def _first_unused(candidate: str, used: cabc.Container[str]) -> str:
    """Return ``candidate`` or its smallest free ``-N`` variant within 30 chars."""
    if candidate not in used:
        return candidate
    suffix = 2
    while True:
        tail = f"-{suffix}"
        base = candidate[: SLUG_MAX_LENGTH - len(tail)].rstrip("-")
        slug = f"{base}{tail}"
        if slug not in used:
            return slug
        suffix += 1


__all__ = ["SlugRegistry", "assign_slug", "normalize_slug"]
