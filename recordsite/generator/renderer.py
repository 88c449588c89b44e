r"""Interpret the theme template micro-language against a data context.

Templates support three constructs, recognized in this precedence order:

- ``{{#each path}}...{{/each}}`` repeats its body for every element of the
  sequence at ``path``. Each iteration sees the element's own fields plus
  ``@index``, ``@first``, ``@last`` and ``@root``, the context enclosing the
  loop. Scalar elements are exposed as ``this``.
- ``{{#if path}}...{{/if}}`` and ``{{#unless path}}...{{/unless}}`` render
  their body when the value at ``path`` is truthy (respectively falsy). Empty
  sequences are falsy.
- ``{{path}}`` substitutes the text form of the value at ``path``.

Paths are dotted field names resolved by :func:`lookup`. A path that cannot be
resolved renders as empty text and the rest of the template continues. The
language is closed: template text is parsed into a small tree and walked, and
substituted values are never parsed again.

Example
-------
>>> from recordsite.generator.renderer import render
>>> render(
...     "{{#each items}}{{name}}-{{@index}};{{/each}}",
...     {"items": [{"name": "a"}, {"name": "b"}]},
... )
'a-0;b-1;'
>>> render("{{#if tags}}yes{{/if}}", {"tags": []})
''
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import re
import threading
import typing as typ

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"\{\{([^{}]+?)\}\}")
BLOCK_KINDS = ("each", "if", "unless")
SEQUENCE_TYPES = (list, tuple)


class _Missing:
    """Marker for a path that could not be resolved."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: typ.Final = _Missing()


@dc.dataclass(frozen=True, slots=True)
class Text:
    """Literal template text."""

    value: str


@dc.dataclass(frozen=True, slots=True)
class Variable:
    """``{{path}}`` substitution."""

    path: str


@dc.dataclass(slots=True)
class Block:
    """``each``, ``if`` or ``unless`` block and its body."""

    kind: str
    path: str
    children: list[Node] = dc.field(default_factory=list)
    closed: bool = False


Node = Text | Variable | Block


def lookup(context: object, path: str) -> typ.Any:
    """Resolve dotted ``path`` against ``context``.

    Each segment narrows into a mapping key, a sequence index, or a
    sequence's ``length``. Resolution stops at the first segment that does
    not exist and returns :data:`MISSING`.

    Examples
    --------
    >>> lookup({"game": {"meta": {"year": 1987}}}, "game.meta.year")
    1987
    >>> lookup({"game": {}}, "game.meta.year")
    MISSING
    >>> lookup({"tags": ["a", "b"]}, "tags.length")
    2
    """
    segments = path.split(".")
    if not all(segments):
        return MISSING
    value: typ.Any = context
    for segment in segments:
        value = _narrow(value, segment)
        if value is MISSING:
            return MISSING
    return value


def _narrow(value: object, segment: str) -> typ.Any:
    if isinstance(value, cabc.Mapping):
        mapping = typ.cast("cabc.Mapping[str, typ.Any]", value)
        return mapping[segment] if segment in mapping else MISSING
    if isinstance(value, SEQUENCE_TYPES):
        if segment == "length":
            return len(value)
        if segment.isdigit() and int(segment) < len(value):
            return value[int(segment)]
    return MISSING


def is_truthy(value: object) -> bool:
    """Return whether ``value`` counts as true inside ``#if``/``#unless``."""
    if value is MISSING or value is None:
        return False
    if isinstance(value, SEQUENCE_TYPES):
        return len(value) > 0
    return bool(value)


def to_text(value: object) -> str:
    """Return the text inserted for a substituted ``value``."""
    match value:
        case _Missing() | None:
            return ""
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case float() if value.is_integer():
            return str(int(value))
        case list() | tuple():
            return ",".join(to_text(element) for element in value)
        case cabc.Mapping():
            return ""
        case _:
            return str(value)


def parse(template_text: str) -> list[Node]:
    """Parse ``template_text`` into a node tree.

    Unbalanced or malformed block tags are logged and dropped; a block that is
    never closed renders as empty text.
    """
    root: list[Node] = []
    stack: list[Block] = []
    current = root
    position = 0
    for match in TAG_PATTERN.finditer(template_text):
        if match.start() > position:
            current.append(Text(template_text[position : match.start()]))
        position = match.end()
        expression = match.group(1).strip()
        if expression.startswith("#"):
            kind, _, path = expression[1:].partition(" ")
            path = path.strip()
            if kind not in BLOCK_KINDS or not path:
                logger.warning("Ignoring malformed block tag %r", match.group(0))
                continue
            block = Block(kind=kind, path=path)
            current.append(block)
            stack.append(block)
            current = block.children
        elif expression.startswith("/"):
            kind = expression[1:].strip()
            if not stack or stack[-1].kind != kind:
                logger.warning("Ignoring unmatched closing tag %r", match.group(0))
                continue
            stack.pop().closed = True
            current = stack[-1].children if stack else root
        elif expression:
            current.append(Variable(expression))
    if position < len(template_text):
        current.append(Text(template_text[position:]))
    for block in stack:
        logger.warning("Block {{#%s %s}} is never closed", block.kind, block.path)
    return root


class Template:
    """A parsed template that can be rendered against many contexts."""

    __slots__ = ("nodes",)

    def __init__(self, nodes: list[Node]) -> None:
        self.nodes = nodes

    @classmethod
    def from_text(cls, template_text: str) -> Template:
        """Parse ``template_text`` into a template."""
        return cls(parse(template_text))

    def render(self, context: cabc.Mapping[str, typ.Any]) -> str:
        """Render the template against ``context``."""
        return _render_nodes(self.nodes, context)


def _render_nodes(nodes: list[Node], context: cabc.Mapping[str, typ.Any]) -> str:
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(value=value):
                parts.append(value)
            case Variable(path=path):
                value = lookup(context, path)
                if value is MISSING:
                    logger.warning("Could not resolve %r", path)
                parts.append(to_text(value))
            case Block(closed=False):
                continue
            case Block(kind="each"):
                parts.append(_render_each(node, context))
            case Block(kind=kind, path=path, children=children):
                value = lookup(context, path)
                if value is MISSING:
                    logger.debug("Condition %r is unresolved; treating as false", path)
                if is_truthy(value) == (kind == "if"):
                    parts.append(_render_nodes(children, context))
    return "".join(parts)


def _render_each(block: Block, context: cabc.Mapping[str, typ.Any]) -> str:
    sequence = lookup(context, block.path)
    if not isinstance(sequence, SEQUENCE_TYPES):
        if sequence is MISSING:
            logger.warning("Could not resolve %r for #each", block.path)
        else:
            logger.warning(
                "#each %r expects a sequence, got %s",
                block.path,
                type(sequence).__name__,
            )
        return ""
    last = len(sequence) - 1
    parts: list[str] = []
    for index, element in enumerate(sequence):
        frame: dict[str, typ.Any] = (
            dict(element) if isinstance(element, cabc.Mapping) else {}
        )
        frame.setdefault("this", element)
        frame.update(
            {
                "@index": index,
                "@first": index == 0,
                "@last": index == last,
                "@root": context,
            }
        )
        parts.append(_render_nodes(block.children, frame))
    return "".join(parts)


def render(template_text: str, context: cabc.Mapping[str, typ.Any]) -> str:
    """Render ``template_text`` against ``context``.

    Parameters
    ----------
    template_text : str
        Template source in the micro-language described in this module.
    context : Mapping[str, Any]
        Data the template paths resolve against. It is never mutated.

    Returns
    -------
    str
        Rendered text. Unresolvable expressions contribute empty text.
    """
    return Template.from_text(template_text).render(context)


class TemplateRenderer:
    """Render templates, caching parsed trees for the lifetime of one run."""

    def __init__(self) -> None:
        self._cache: dict[str, Template] = {}
        self._lock = threading.Lock()

    def compile(self, template_text: str) -> Template:
        """Return the parsed template for ``template_text``, parsing it once."""
        with self._lock:
            template = self._cache.get(template_text)
            if template is None:
                template = Template.from_text(template_text)
                self._cache[template_text] = template
        return template

    def render(self, template_text: str, context: cabc.Mapping[str, typ.Any]) -> str:
        """Render ``template_text`` against ``context`` using the cache."""
        return self.compile(template_text).render(context)


__all__ = [
    "MISSING",
    "Template",
    "TemplateRenderer",
    "is_truthy",
    "lookup",
    "parse",
    "render",
    "to_text",
]
