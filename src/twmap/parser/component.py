"""Component strategies: ``class``/``className`` attributes in JSX and TSX.

Both dialects are parsed with tree-sitter; the typed dialect uses the TSX
grammar so type annotations and generics are never mistaken for markup.
"""

from __future__ import annotations

from functools import lru_cache

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser

from twmap.errors import ParseError
from twmap.model.occurrence import ClassOccurrence, FileKind
from twmap.parser.classifier import classify_component_value

__all__ = ["CLASS_ATTRIBUTES", "parse_component"]

CLASS_ATTRIBUTES = frozenset({"class", "className"})

_ELEMENT_TYPES = ("jsx_opening_element", "jsx_self_closing_element")


@lru_cache(maxsize=None)
def _language(kind: FileKind) -> Language:
    if kind is FileKind.TYPED_COMPONENT:
        return Language(tstypescript.language_tsx())
    if kind is FileKind.COMPONENT:
        return Language(tsjavascript.language())
    raise ValueError(f"Not a component dialect: {kind}")


def _first_error(root: Node) -> Node | None:
    """First ERROR or missing node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _iter_attributes(root: Node):
    """Yield every ``jsx_attribute`` node of every element, in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "jsx_attribute" and node.parent is not None and (
            node.parent.type in _ELEMENT_TYPES
        ):
            yield node
        stack.extend(reversed(node.children))


def _attribute_value(attr: Node) -> Node | None:
    children = attr.children
    if len(children) >= 3 and children[1].type == "=":
        return children[2]
    return None


def parse_component(
    content: str, kind: FileKind, file_path: str = "<string>"
) -> list[ClassOccurrence]:
    """Return every ``class``/``className`` value in a JSX or TSX source.

    Raises :class:`ParseError` if the syntax tree contains errors.
    """
    source = content.encode("utf-8")
    parser = Parser(_language(kind))
    tree = parser.parse(source)

    error = _first_error(tree.root_node)
    if error is not None:
        line, column = error.start_point[0] + 1, error.start_point[1] + 1
        what = f"missing {error.type}" if error.is_missing else "syntax error"
        raise ParseError(
            f"{file_path}:{line}:{column}: {what}", line=line, column=column
        )

    occurrences: list[ClassOccurrence] = []
    for attr in _iter_attributes(tree.root_node):
        name_node = attr.children[0]
        name = source[name_node.start_byte : name_node.end_byte].decode("utf-8")
        if name not in CLASS_ATTRIBUTES:
            continue
        value = _attribute_value(attr)
        if value is None:
            continue
        verdict = classify_component_value(value, source)
        if verdict.safe and not (verdict.text or "").strip():
            continue
        occurrences.append(
            ClassOccurrence(
                file_path=file_path,
                byte_range=(value.start_byte, value.end_byte),
                raw_value=verdict.text,
                safe=verdict.safe,
                opener=verdict.opener,
                closer=verdict.closer,
                attribute=name,
                kind=verdict.kind,
            )
        )
    return occurrences
