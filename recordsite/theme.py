"""Load named template texts from a theme directory.

A theme is a folder of HTML files written in the template micro-language.
``baseof.html``, ``single.html`` and ``list.html`` are required;
``pagination.html``, ``taxonomy.html`` and ``terms.html`` are optional.

Example
-------
>>> from pathlib import Path
>>> from recordsite.theme import load_theme
>>> theme = load_theme(Path("themes/default"))  # doctest: +SKIP
>>> theme.supports_taxonomies  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import REQUIRED_TEMPLATES, TAXONOMY_TEMPLATES, THEME_FILES

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class ThemeError(ValueError):
    """Raised when a theme is missing or lacks a required template."""


@dc.dataclass(slots=True)
class Theme:
    """Template texts keyed by role (``base``, ``single``, ``list``, ...)."""

    name: str
    templates: dict[str, str]

    def get(self, role: str) -> str | None:
        """Return the template text for ``role`` or None when absent."""
        return self.templates.get(role)

    def require(self, role: str) -> str:
        """Return the template text for ``role`` or raise ThemeError."""
        try:
            return self.templates[role]
        except KeyError as exc:
            msg = f"Theme '{self.name}' has no '{role}' template."
            raise ThemeError(msg) from exc

    @property
    def supports_taxonomies(self) -> bool:
        """Return True when both taxonomy templates are available."""
        return all(role in self.templates for role in TAXONOMY_TEMPLATES)


def load_theme(theme_dir: Path) -> Theme:
    """Read every known template file from ``theme_dir``.

    Parameters
    ----------
    theme_dir : Path
        Directory holding the theme's HTML files.

    Returns
    -------
    Theme
        Loaded templates; optional templates are omitted when absent.

    Raises
    ------
    ThemeError
        If the directory does not exist or a required template is missing.
    """
    if not theme_dir.is_dir():
        msg = f"Theme directory '{theme_dir}' not found."
        raise ThemeError(msg)
    templates: dict[str, str] = {}
    for role, filename in THEME_FILES.items():
        path = theme_dir / filename
        if path.is_file():
            templates[role] = path.read_text(encoding="utf-8")
    missing = [role for role in REQUIRED_TEMPLATES if role not in templates]
    if missing:
        names = ", ".join(THEME_FILES[role] for role in missing)
        msg = f"Theme '{theme_dir.name}' is missing required templates: {names}."
        raise ThemeError(msg)
    optional_missing = [role for role in THEME_FILES if role not in templates]
    if optional_missing:
        logger.info(
            "Theme %r has no %s template(s)", theme_dir.name, ", ".join(optional_missing)
        )
    return Theme(name=theme_dir.name, templates=templates)


__all__ = ["Theme", "ThemeError", "load_theme"]
