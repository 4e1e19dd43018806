"""Occurrence model: class-bearing attribute values found in one source file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from twmap.model.mapping import normalize_class_string


class FileKind(Enum):
    """Source dialect, selected from the file extension."""

    MARKUP = "markup"
    COMPONENT = "component"
    TYPED_COMPONENT = "typed_component"


class ValueKind(Enum):
    """Classification of one attribute value."""

    STATIC = "static"
    SIMPLE_TEMPLATE = "simple_template"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class Classification:
    """Result of classifying an attribute value node.

    ``text`` is the literal content for safe values and ``None`` for dynamic
    ones. ``opener`` and ``closer`` are the exact source text wrapped around
    the literal inside the value (quotes, braces, backticks).
    """

    kind: ValueKind
    text: str | None = None
    opener: str = ""
    closer: str = ""

    @property
    def safe(self) -> bool:
        return self.kind is not ValueKind.DYNAMIC

    @classmethod
    def dynamic(cls) -> Classification:
        return cls(kind=ValueKind.DYNAMIC)


@dataclass(frozen=True)
class ClassOccurrence:
    """One class attribute value inside one file.

    Attributes:
        file_path: Identifier of the source file.
        byte_range: Half-open ``(start, end)`` offsets of the attribute value,
            quotes included, in the UTF-8 encoding of the file text.
        raw_value: Literal content for safe occurrences, ``None`` otherwise.
        safe: True only for plain string literals and templates without
            interpolation.
        opener: Source text between ``start`` and the literal content.
        closer: Source text between the literal content and ``end``.
        attribute: Attribute name as written (``class`` or ``className``).
        kind: The classifier's verdict.
    """

    file_path: str
    byte_range: tuple[int, int]
    raw_value: str | None
    safe: bool
    opener: str = ""
    closer: str = ""
    attribute: str = "class"
    kind: ValueKind = ValueKind.STATIC

    @property
    def start(self) -> int:
        return self.byte_range[0]

    @property
    def end(self) -> int:
        return self.byte_range[1]

    @property
    def class_string(self) -> str | None:
        """The mapping key: raw value with whitespace runs collapsed."""
        if not self.safe or self.raw_value is None:
            return None
        return normalize_class_string(self.raw_value)

    def source_text(self) -> str | None:
        """Exact text the value occupied when parsed (safe occurrences only)."""
        if self.raw_value is None:
            return None
        return f"{self.opener}{self.raw_value}{self.closer}"


@dataclass
class ParseResult:
    """Outcome of parsing one file: either occurrences or an error reason."""

    file_path: str
    occurrences: list[ClassOccurrence] = field(default_factory=list)
    error: str | None = None
    kind: FileKind | None = None
    stage: str | None = None  # "read", "parse", "unsupported" when failed

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def class_strings(self) -> list[str]:
        """Mapping keys of every safe occurrence, duplicates kept, document order.

        Whitespace runs are collapsed (see ``ClassOccurrence.class_string``);
        :attr:`raw_class_strings` has the values as authored.
        """
        result: list[str] = []
        for occ in self.occurrences:
            cs = occ.class_string
            if cs:
                result.append(cs)
        return result

    @property
    def raw_class_strings(self) -> list[str]:
        """Literal value of every safe occurrence exactly as written."""
        return [
            occ.raw_value
            for occ in self.occurrences
            if occ.safe and occ.raw_value is not None and occ.raw_value.strip()
        ]

    @property
    def dynamic_count(self) -> int:
        return sum(1 for occ in self.occurrences if not occ.safe)

    @classmethod
    def failed(
        cls,
        file_path: str,
        error: str,
        kind: FileKind | None = None,
        stage: str = "parse",
    ) -> ParseResult:
        return cls(file_path=file_path, error=error, kind=kind, stage=stage)
