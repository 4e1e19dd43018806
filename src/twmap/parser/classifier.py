"""Tokenizer/Classifier: decides whether an attribute value is safe to rewrite.

Three verdicts (see :class:`~twmap.model.occurrence.ValueKind`):

* ``STATIC`` -- a plain string literal, used verbatim.
* ``SIMPLE_TEMPLATE`` -- a template literal with no interpolation.
* ``DYNAMIC`` -- anything else. Never rewritten, never evaluated.

When in doubt the classifier answers ``DYNAMIC``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from twmap.model.mapping import split_tokens
from twmap.model.occurrence import Classification, ValueKind

if TYPE_CHECKING:
    from tree_sitter import Node

__all__ = [
    "classify_component_value",
    "classify_markup_value",
    "extract_tokens",
]

# Markers of server-side or client-side templating inside markup attributes.
TEMPLATE_MARKERS = ("{{", "{%", "{#", "${", "<%")

_QUOTES = ('"', "'")

# Unquoted markup values holding these belong to a host framework's expression syntax.
_EXPRESSION_CHARS = frozenset("{}()")


def extract_tokens(classification: Classification) -> list[str]:
    """Space-separated class tokens of a safe value; empty for dynamic ones."""
    if not classification.safe or classification.text is None:
        return []
    return split_tokens(classification.text)


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


def classify_markup_value(raw: str) -> Classification:
    """Classify a markup attribute value as written, quotes included."""
    opener = closer = ""
    text = raw
    if len(raw) >= 2 and raw[0] in _QUOTES and raw[-1] == raw[0]:
        opener = closer = raw[0]
        text = raw[1:-1]
    elif raw[:1] in _QUOTES:
        return Classification.dynamic()

    if any(marker in text for marker in TEMPLATE_MARKERS):
        return Classification.dynamic()
    if text.lstrip().startswith("{"):
        return Classification.dynamic()
    if not opener and _EXPRESSION_CHARS.intersection(text):
        return Classification.dynamic()
    # Character references would need decoding to know the real tokens.
    if "&" in text:
        return Classification.dynamic()
    return Classification(ValueKind.STATIC, text, opener, closer)


# ---------------------------------------------------------------------------
# Component dialects (tree-sitter nodes)
# ---------------------------------------------------------------------------


def _text(source: bytes, start: int, end: int) -> str:
    return source[start:end].decode("utf-8")


def _string_literal(node: Node, source: bytes) -> tuple[int, int] | None:
    """Byte span of a string literal's content, or None if not plain."""
    if node.type != "string":
        return None
    for child in node.named_children:
        # escape_sequence, html_character_reference
        if child.type != "string_fragment":
            return None
    if node.end_byte - node.start_byte < 2:
        return None
    return node.start_byte + 1, node.end_byte - 1


def _template_literal(node: Node) -> tuple[int, int] | None:
    """Byte span of a template literal's content, or None if it interpolates."""
    if node.type != "template_string":
        return None
    for child in node.named_children:
        # template_substitution, escape_sequence
        if child.type != "string_fragment":
            return None
    return node.start_byte + 1, node.end_byte - 1


def classify_component_value(node: Node, source: bytes) -> Classification:
    """Classify the value node of a JSX attribute.

    *node* is the node after ``=``: a ``string``, a ``jsx_expression`` or
    anything else the grammar allows there. *source* is the UTF-8 file
    content the tree was built from.
    """
    start, end = node.start_byte, node.end_byte

    if node.type == "string":
        span = _string_literal(node, source)
        # JSX attribute strings decode character references.
        if span is None or b"&" in source[span[0] : span[1]]:
            return Classification.dynamic()
        return Classification(
            ValueKind.STATIC,
            _text(source, *span),
            _text(source, start, span[0]),
            _text(source, span[1], end),
        )

    if node.type != "jsx_expression":
        return Classification.dynamic()

    inner = [c for c in node.named_children if c.type != "comment"]
    if len(inner) != 1:
        return Classification.dynamic()
    expr = inner[0]

    if expr.type == "string":
        span = _string_literal(expr, source)
        kind = ValueKind.STATIC
    elif expr.type == "template_string":
        span = _template_literal(expr)
        kind = ValueKind.SIMPLE_TEMPLATE
    else:
        return Classification.dynamic()

    if span is None:
        return Classification.dynamic()
    return Classification(
        kind,
        _text(source, *span),
        _text(source, start, span[0]),
        _text(source, span[1], end),
    )
