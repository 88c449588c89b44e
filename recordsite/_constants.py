"""Common literal values used across recordsite.

These constants keep template names, theme filenames, and slug limits
centralized so the generator, theme loader, and tests can import the same
values without drifting. Intended for internal use within the recordsite
package.

Examples
--------
>>> from recordsite import _constants
>>> _constants.THEME_FILES["base"]
'baseof.html'
>>> _constants.PAGE_TOKEN in _constants.DEFAULT_FILENAME_PATTERN
True
"""

PAGE_TOKEN = "{page}"
DEFAULT_FILENAME_PATTERN = "page-{page}"
INDEX_FILENAME = "index.html"

SLUG_FALLBACK = "untitled"
SLUG_MIN_LENGTH = 2
SLUG_MAX_LENGTH = 30
SLUG_PAD_CHAR = "0"

THEME_FILES: dict[str, str] = {
    "base": "baseof.html",
    "single": "single.html",
    "list": "list.html",
    "pagination": "pagination.html",
    "taxonomy": "taxonomy.html",
    "terms": "terms.html",
}
REQUIRED_TEMPLATES = ("base", "single", "list")
TAXONOMY_TEMPLATES = ("taxonomy", "terms")

ITEM_LABEL_FIELDS = ("slug", "id", "title", "name")
