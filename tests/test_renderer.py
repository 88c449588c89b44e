"""Unit tests for the template micro-language interpreter.

The tests cover dotted path lookup, loop frames and their reserved keys,
conditional truthiness, substitution text forms, nesting, and the degradation
rules for unresolvable paths and malformed tags.

Usage
-----
Run ``pytest tests/test_renderer.py -v``. ``caplog`` is used to check that
input defects are logged rather than raised.
"""

from __future__ import annotations

import logging

import pytest

from recordsite.generator.renderer import (
    MISSING,
    TemplateRenderer,
    is_truthy,
    lookup,
    render,
)


def test_each_exposes_index_and_fields() -> None:
    """Loop bodies should see element fields and ``@index``."""
    output = render(
        "{{#each items}}{{name}}-{{@index}};{{/each}}",
        {"items": [{"name": "a"}, {"name": "b"}]},
    )
    assert output == "a-0;b-1;", f"unexpected loop output {output!r}"


@pytest.mark.parametrize(
    ("tags", "expected"),
    [([], ""), (["x"], "yes")],
)
def test_if_treats_empty_sequences_as_false(tags: list[str], expected: str) -> None:
    """``#if`` on a sequence should depend on whether it is empty."""
    assert render("{{#if tags}}yes{{/if}}", {"tags": tags}) == expected


def test_first_and_last_flags() -> None:
    """``@first`` and ``@last`` should mark the ends of the sequence."""
    template = (
        "{{#each items}}{{#if @first}}[{{/if}}{{this}}"
        "{{#unless @last}},{{/unless}}{{#if @last}}]{{/if}}{{/each}}"
    )
    assert render(template, {"items": ["a", "b", "c"]}) == "[a,b,c]"
    assert render(template, {"items": ["solo"]}) == "[solo]"


def test_nested_loops_resolve_against_iteration_context() -> None:
    """Inner loops should iterate over fields of the current element."""
    context = {
        "groups": [
            {"label": "G1", "members": [{"name": "a"}, {"name": "b"}]},
            {"label": "G2", "members": []},
            {"label": "G3", "members": [{"name": "c"}]},
        ]
    }
    template = (
        "{{#each groups}}{{label}}:"
        "{{#each members}}{{name}}{{@index}}{{/each}}"
        "{{#unless members}}none{{/unless}};{{/each}}"
    )
    assert render(template, context) == "G1:a0b1;G2:none;G3:c0;"


def test_root_escapes_loop_scope() -> None:
    """``@root`` should reach the context enclosing the loop."""
    context = {"site": {"title": "Arcade"}, "games": [{"v": 1}, {"v": 2}]}
    template = "{{#each games}}{{@root.site.title}}{{v}} {{/each}}"
    assert render(template, context) == "Arcade1 Arcade2 "


def test_nested_root_is_the_parent_iteration() -> None:
    """Inside a nested loop ``@root`` is the enclosing row, not the page."""
    context = {"x": "outer", "rows": [{"x": "row", "cells": [1]}]}
    template = "{{#each rows}}{{#each cells}}{{@root.x}}{{/each}}{{/each}}"
    output = render(template, context)
    assert output == "row", f"expected the parent frame, got {output!r}"
    chained = "{{#each rows}}{{#each cells}}{{@root.@root.x}}{{/each}}{{/each}}"
    assert render(chained, context) == "outer"


def test_loop_frame_does_not_leak_outer_fields() -> None:
    """The iteration context is the element, not the outer context."""
    output = render("{{#each items}}[{{title}}]{{/each}}", {"title": "outer", "items": [{}]})
    assert output == "[]", f"outer fields should not resolve inside loops, got {output!r}"


def test_nested_paths_and_sequence_access() -> None:
    """Dotted paths should narrow through mappings, indices, and length."""
    context = {"game": {"meta": {"year": 1987}, "tags": ["arcade", "racing"]}}
    assert render("{{game.meta.year}}", context) == "1987"
    assert render("{{game.tags.1}}/{{game.tags.length}}", context) == "racing/2"
    assert lookup(context, "game.meta.publisher") is MISSING
    assert lookup(context, "game..year") is MISSING
    assert lookup(context, "game.tags.9") is MISSING


def test_unresolved_paths_degrade_to_empty_text(caplog: pytest.LogCaptureFixture) -> None:
    """Missing segments should render nothing and keep the rest of the output."""
    with caplog.at_level(logging.WARNING, logger="recordsite.generator.renderer"):
        output = render("<{{missing.deep}}>{{ok}}", {"ok": "fine"})
    assert output == "<>fine", f"unexpected output {output!r}"
    assert "missing.deep" in caplog.text, "expected a warning naming the path"


def test_each_over_non_sequence_renders_empty(caplog: pytest.LogCaptureFixture) -> None:
    """``#each`` on a mapping or string should render an empty block."""
    with caplog.at_level(logging.WARNING, logger="recordsite.generator.renderer"):
        assert render("a{{#each meta}}x{{/each}}b", {"meta": {"k": 1}}) == "ab"
        assert render("{{#each name}}x{{/each}}", {"name": "abc"}) == ""
    assert "expects a sequence" in caplog.text


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, False),
        (MISSING, False),
        ("", False),
        (0, False),
        (0.0, False),
        (False, False),
        ({}, False),
        ((), False),
        ("0", True),
        (1, True),
        ({"a": 1}, True),
        (["x"], True),
    ],
)
def test_truthiness(value: object, expected: bool) -> None:
    """Empty, zero, and absent values should be false."""
    assert is_truthy(value) is expected, f"truthiness of {value!r} should be {expected}"


def test_unless_renders_on_falsy_values() -> None:
    """``#unless`` should render exactly when the condition is falsy."""
    template = "{{#unless draft}}published{{/unless}}"
    assert render(template, {}) == "published"
    assert render(template, {"draft": []}) == "published"
    assert render(template, {"draft": True}) == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (3, "3"),
        (2.0, "2"),
        (2.5, "2.5"),
        (True, "true"),
        (False, "false"),
        (None, ""),
        (["a", "b"], "a,b"),
        ({"k": "v"}, ""),
    ],
)
def test_substitution_text_forms(value: object, expected: str) -> None:
    """Substituted values should use their plain text forms."""
    assert render("{{value}}", {"value": value}) == expected


def test_substituted_values_are_not_reinterpreted() -> None:
    """Template syntax inside data should be emitted literally."""
    context = {"title": "{{secret}}", "secret": "leak"}
    assert render("{{title}}", context) == "{{secret}}"


def test_malformed_tags_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    """Unknown blocks, stray closers, and unclosed blocks render empty."""
    with caplog.at_level(logging.WARNING, logger="recordsite.generator.renderer"):
        assert render("a{{#with x}}b{{/with}}c", {"x": 1}) == "abc"
        assert render("a{{/if}}b", {}) == "ab"
        assert render("a{{#if x}}never closed", {"x": True}) == "a"
    assert "never closed" in caplog.text


def test_whitespace_inside_tags_is_ignored() -> None:
    """Padding inside tag braces should not affect resolution."""
    context = {"items": [{"name": "a"}]}
    assert render("{{#each  items }}{{ name }}{{/each}}", context) == "a"


def test_render_is_idempotent_and_pure() -> None:
    """Rendering twice should give the same result and not mutate the context."""
    context = {"items": [{"name": "a"}], "title": "T"}
    snapshot = repr(context)
    template = "{{title}}{{#each items}}{{name}}{{@index}}{{/each}}"
    assert render(template, context) == render(template, context) == "Ta0"
    assert repr(context) == snapshot, "rendering must not mutate the context"


def test_template_renderer_caches_parsed_templates() -> None:
    """The run-scoped renderer should parse each distinct text once."""
    renderer = TemplateRenderer()
    first = renderer.compile("{{a}}")
    assert renderer.compile("{{a}}") is first
    assert renderer.render("{{a}}", {"a": 1}) == "1"
    assert renderer.compile("{{b}}") is not first
