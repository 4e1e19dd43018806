"""Markup strategy: finds ``class`` attributes in plain HTML-like markup.

A byte-level scanner locates start tags and skips comments, closing tags,
declarations and the bodies of ``<script>``/``<style>``. Each start tag's
attribute list is parsed with a small Lark grammar; a tag whose attributes
do not parse is skipped with a warning and scanning continues.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from twmap.errors import ParseError
from twmap.model.occurrence import ClassOccurrence
from twmap.parser.classifier import classify_markup_value

__all__ = ["parse_markup"]

GRAMMAR_PATH = Path(__file__).parent / "markup.lark"

log = logging.getLogger("twmap.parser")

_TAG_RE = re.compile(
    rb"""
    <!--.*?(?:-->|\Z)                       # comment
    | <[!?][^>]*>?                          # doctype, processing instruction
    | </[^>]*>?                             # closing tag
    | <(?P<name>[A-Za-z][^\s/>]*)           # start tag name
      (?P<attrs>(?:[^>"']|"[^"]*"|'[^']*')*)
      (?P<close>>)?
    """,
    re.VERBOSE | re.DOTALL,
)

_CLASS_ATTR_RE = re.compile(rb"(?:^|[\s\"'])class\s*=", re.IGNORECASE)

_RAW_TEXT_TAGS = (b"script", b"style")


class _Attribute:
    def __init__(self, name: Token, value: Token | None):
        self.name = name
        self.value = value


class _AttributeTransformer(Transformer):  # type: ignore[type-arg]
    """Turn an attribute-list parse tree into ``_Attribute`` objects."""

    def value(self, items: list[Token]) -> Token:
        return items[0]

    def attribute(self, items: list[Token]) -> _Attribute:
        value = items[1] if len(items) > 1 else None
        return _Attribute(items[0], value)

    def start(self, items: list[_Attribute]) -> list[_Attribute]:
        return list(items)


@lru_cache(maxsize=1)
def _attribute_parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def _line_column(data: bytes, offset: int) -> tuple[int, int]:
    line = data.count(b"\n", 0, offset) + 1
    column = offset - (data.rfind(b"\n", 0, offset) + 1) + 1
    return line, column


def _parse_attributes(text: str) -> list[_Attribute]:
    tree = _attribute_parser().parse(text)
    return _AttributeTransformer().transform(tree)


def _tag_occurrences(
    data: bytes, attrs_start: int, attrs_end: int, file_path: str
) -> list[ClassOccurrence]:
    """Occurrences of ``class`` in one start tag's attribute list."""
    text = data[attrs_start:attrs_end].decode("utf-8")
    try:
        attributes = _parse_attributes(text)
    except UnexpectedInput as exc:
        line, column = _line_column(data, attrs_start)
        log.warning(
            "%s:%d:%d: skipping malformed tag: %s",
            file_path,
            line,
            column,
            str(exc).splitlines()[0],
        )
        return []

    found: list[ClassOccurrence] = []
    for attr in attributes:
        if str(attr.name).lower() != "class" or attr.value is None:
            continue
        value = attr.value
        assert value.start_pos is not None and value.end_pos is not None
        start = attrs_start + len(text[: value.start_pos].encode("utf-8"))
        end = attrs_start + len(text[: value.end_pos].encode("utf-8"))
        verdict = classify_markup_value(str(value))
        if verdict.safe and not (verdict.text or "").strip():
            continue
        found.append(
            ClassOccurrence(
                file_path=file_path,
                byte_range=(start, end),
                raw_value=verdict.text,
                safe=verdict.safe,
                opener=verdict.opener,
                closer=verdict.closer,
                attribute=str(attr.name),
                kind=verdict.kind,
            )
        )
    return found


def parse_markup(content: str, file_path: str = "<string>") -> list[ClassOccurrence]:
    """Return every ``class`` attribute value in *content*, in document order.

    Raises :class:`ParseError` when a start tag carrying a ``class``
    attribute is still open at end of input.
    """
    data = content.encode("utf-8")
    occurrences: list[ClassOccurrence] = []
    pos = 0
    while True:
        match = _TAG_RE.search(data, pos)
        if match is None:
            break
        pos = match.end()
        name = match.group("name")
        if name is None:
            continue

        if match.group("close") is None:
            bound = data.find(b">", match.end("attrs"))
            if bound == -1:
                if _CLASS_ATTR_RE.search(data, match.start("attrs")):
                    line, column = _line_column(data, match.start())
                    raise ParseError(
                        f"{file_path}:{line}:{column}: unterminated <{name.decode()}> tag",
                        line=line,
                        column=column,
                    )
                break
            line, column = _line_column(data, match.start())
            log.warning(
                "%s:%d:%d: skipping malformed <%s> tag",
                file_path,
                line,
                column,
                name.decode(),
            )
            pos = bound + 1
            continue

        occurrences.extend(
            _tag_occurrences(data, match.start("attrs"), match.end("attrs"), file_path)
        )

        self_closing = match.group("attrs").rstrip().endswith(b"/")
        if name.lower() in _RAW_TEXT_TAGS and not self_closing:
            closing = re.compile(rb"</" + re.escape(name) + rb"\s*>", re.IGNORECASE)
            end = closing.search(data, pos)
            pos = end.end() if end else len(data)

    return occurrences
