"""Shared fixtures for recordsite tests."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

THEME_TEMPLATES: dict[str, str] = {
    "baseof.html": (
        "<html><head><title>{{#if title}}{{title}} | {{/if}}{{site.title}}</title></head>"
        "<body><nav class=\"site\">{{#each taxonomies}}"
        "<a class=\"tax\" href=\"{{url}}\">{{name}}</a>{{/each}}</nav>"
        "<main>{{content}}</main></body></html>"
    ),
    "single.html": "<h1>{{title}}</h1><a class=\"self\" href=\"{{url}}\">{{slug}}</a>",
    "list.html": (
        "<ul class=\"items\">{{#each items}}<li><a href=\"{{url}}\">{{title}}</a></li>"
        "{{/each}}</ul>{{pagination.html}}"
    ),
    "pagination.html": (
        "<nav class=\"pager\">{{#each pagination.pages}}"
        "<a class=\"page{{#if is_current}} current{{/if}}\" href=\"{{url}}\">{{number}}</a>"
        "{{/each}}</nav>"
    ),
    "taxonomy.html": (
        "<h1 class=\"term\">{{term.name}}</h1>"
        "<ul class=\"items\">{{#each items}}<li>{{title}}</li>{{/each}}</ul>"
    ),
    "terms.html": (
        "<ul class=\"terms\">{{#each terms}}"
        "<li data-slug=\"{{slug}}\" data-count=\"{{count}}\">{{name}}</li>{{/each}}</ul>"
    ),
}


@pytest.fixture
def themes_dir(tmp_path: Path) -> Path:
    """Write a complete ``default`` theme and return the themes directory."""
    root = tmp_path / "themes"
    theme = root / "default"
    theme.mkdir(parents=True)
    for filename, text in THEME_TEMPLATES.items():
        (theme / filename).write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def games_json(tmp_path: Path) -> Path:
    """Write three game records to a local JSON data source."""
    path = tmp_path / "games.json"
    path.write_text(
        dedent(
            """
            [
              {"id": "space-harrier", "title": "Space Harrier", "genres": ["action", "retro"]},
              {"id": "outrun", "title": "OutRun", "genres": ["racing", "retro"]},
              {"title": "Tetris", "genres": [{"name": "Puzzle"}]}
            ]
            """
        ).strip(),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def write_site_config(
    tmp_path: Path, themes_dir: Path, games_json: Path
) -> typ.Callable[..., Path]:
    """Return a helper writing ``site.yaml`` with overridable options."""

    def _write(**options: object) -> Path:
        settings: dict[str, object] = {
            "data": f"[{games_json}]",
            "themes_dir": str(themes_dir),
            "output_dir": str(tmp_path / "public"),
            "items_per_page": 2,
            "url_style": "flat",
            "taxonomies": "[genres]",
        }
        settings.update(options)
        lines = ["site:", "  title: Arcade", "  base_url: /"]
        lines.extend(f"{key}: {value}" for key, value in settings.items())
        path = tmp_path / "site.yaml"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
