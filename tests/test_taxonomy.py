"""Unit tests for taxonomy grouping and term page planning."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from recordsite.generator.taxonomy import TaxonomyIndexer, index_taxonomies, term_name
from recordsite.paths import PathResolver


@pytest.fixture
def games() -> list[dict[str, typ.Any]]:
    """Return two items sharing the ``retro`` genre."""
    return [
        {"title": "Space Harrier", "genres": ["action", "retro"]},
        {"title": "OutRun", "genres": ["retro"]},
    ]


def test_terms_group_items_in_supplied_order(games: list[dict[str, typ.Any]]) -> None:
    """Terms should appear in first-seen order with their items in item order."""
    terms = index_taxonomies(games, ["genres"])["genres"]
    assert list(terms) == ["action", "retro"], f"unexpected term order {list(terms)!r}"
    assert terms["action"].items == [games[0]]
    assert terms["retro"].items == [games[0], games[1]]
    assert terms["retro"].count == 2


def test_structured_references_use_their_name() -> None:
    """Mapping references should contribute their ``name`` field."""
    items = [{"tags": [{"name": "Co-op"}, "co-op", {"name": "Local Multiplayer"}]}]
    terms = index_taxonomies(items, ["tags"])["tags"]
    assert list(terms) == ["co-op", "local-multiplayer"]
    assert terms["co-op"].name == "Co-op", "display name should come from first sighting"


def test_repeated_reference_is_kept_by_default() -> None:
    """Without dedupe an item listing a term twice is recorded twice."""
    item = {"tags": ["retro", "retro"]}
    terms = index_taxonomies([item], ["tags"])["tags"]
    assert terms["retro"].items == [item, item]


def test_dedupe_skips_back_to_back_repeats() -> None:
    """With dedupe on, the same item is not appended twice in a row."""
    first = {"tags": ["retro", "Retro"]}
    second = {"tags": ["retro"]}
    terms = index_taxonomies([first, second], ["tags"], dedupe=True)["tags"]
    assert terms["retro"].items == [first, second]


def test_distinct_labels_with_same_slug_get_suffixes() -> None:
    """Different names normalizing alike should become separate terms."""
    terms = index_taxonomies([{"tags": ["C++", "C#"]}], ["tags"])["tags"]
    assert [(term.slug, term.name) for term in terms.values()] == [
        ("c0", "C++"),
        ("c0-2", "C#"),
    ]


def test_taxonomies_have_independent_slug_scopes() -> None:
    """The same term slug may appear in two taxonomies."""
    index = index_taxonomies([{"genres": ["retro"], "tags": ["retro"]}], ["genres", "tags"])
    assert list(index["genres"]) == ["retro"]
    assert list(index["tags"]) == ["retro"]


def test_bad_attributes_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    """Non-list attributes and unusable entries are warnings, not errors."""
    items = [
        "not a mapping",
        {"tags": "retro"},
        {"tags": [None, {"id": 3}, "", "ok"]},
        {"title": "no tags"},
    ]
    with caplog.at_level(logging.WARNING, logger="recordsite.generator.taxonomy"):
        terms = index_taxonomies(items, ["tags"])["tags"]
    assert list(terms) == ["ok"]
    assert "non-list" in caplog.text
    assert "unusable" in caplog.text


@pytest.mark.parametrize(
    ("entry", "expected"),
    [("  retro ", "retro"), ({"name": "Retro"}, "Retro"), (42, "42"), (True, None), ([], None)],
)
def test_term_name(entry: object, expected: str | None) -> None:
    """Only labels, named mappings, and numbers produce display names."""
    assert term_name(entry) == expected


def test_plan_emits_term_pages_and_terms_index(games: list[dict[str, typ.Any]]) -> None:
    """Every term gets listing pages and the taxonomy gets one terms index."""
    indexer = TaxonomyIndexer(PathResolver("clean"), items_per_page=1)
    index = indexer.index(games, ["genres"])
    pages = indexer.plan(index, {"genres": "genres"}, context={"site": {"title": "T"}})

    assert [(page.template, page.output_path) for page in pages] == [
        ("taxonomy", "genres/action/index.html"),
        ("taxonomy", "genres/retro/index.html"),
        ("taxonomy", "genres/retro/page-2/index.html"),
        ("terms", "genres/index.html"),
    ]
    retro_second = pages[2].context
    assert retro_second["term"]["name"] == "retro"
    assert retro_second["term"]["count"] == 2
    assert retro_second["items"] == [games[1]]
    assert retro_second["site"] == {"title": "T"}

    terms_page = pages[-1]
    assert terms_page.pagination is None, "the terms index is never paginated"
    assert terms_page.context["terms"] == [
        {"name": "action", "slug": "action", "count": 1, "url": "/genres/action/"},
        {"name": "retro", "slug": "retro", "count": 2, "url": "/genres/retro/"},
    ]


def test_term_slugs_avoid_numbered_page_names() -> None:
    """A term named like another term's page 2 must not share its file."""
    items = [{"genres": ["Action"]} for _ in range(3)] + [{"genres": ["Action Page 2"]}]
    indexer = TaxonomyIndexer(PathResolver("flat"), items_per_page=2)
    index = indexer.index(items, ["genres"])
    pages = indexer.plan(index, {"genres": "genres"})

    paths = [page.output_path for page in pages]
    assert len(set(paths)) == len(paths), f"duplicate output paths {paths!r}"
    assert paths == [
        "genres/action.html",
        "genres/action-page-2.html",
        "genres/action-page-2-2.html",
        "genres.html",
    ]
    assert list(index["genres"]) == ["action", "action-page-2-2"]
    assert index["genres"]["action-page-2-2"].name == "Action Page 2"


def test_clean_term_slugs_keep_their_names() -> None:
    """Clean numbered pages nest under their own term, so nothing moves."""
    items = [{"genres": ["Action"]} for _ in range(3)] + [{"genres": ["Action Page 2"]}]
    indexer = TaxonomyIndexer(PathResolver("clean"), items_per_page=2)
    index = indexer.index(items, ["genres"])
    assert list(index["genres"]) == ["action", "action-page-2"]
