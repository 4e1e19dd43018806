"""Outcome models: results of rewriting files and emitting the stylesheet."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from enum import Enum

from twmap.model.occurrence import ClassOccurrence


class SkipReason(Enum):
    """Why an occurrence was left untouched."""

    DYNAMIC = "dynamic"
    UNMAPPED = "unmapped"
    STALE = "stale"


@dataclass(frozen=True)
class Replacement:
    """A planned in-place edit of one occurrence's byte range."""

    byte_range: tuple[int, int]
    original: str
    replacement: str
    class_string: str
    short_name: str


@dataclass(frozen=True)
class Skip:
    occurrence: ClassOccurrence
    reason: SkipReason


@dataclass
class RewriteOutcome:
    """Result of rewriting one file.

    ``content`` holds the rewritten text; in dry-run mode nothing was written
    and ``written`` stays False even when replacements were planned.
    """

    file_path: str
    original: str
    content: str
    replacements: list[Replacement] = field(default_factory=list)
    skipped: list[Skip] = field(default_factory=list)
    dry_run: bool = False
    written: bool = False

    @property
    def replaced_count(self) -> int:
        return len(self.replacements)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def changed(self) -> bool:
        return self.content != self.original

    def skip_counts(self) -> dict[SkipReason, int]:
        counts: dict[SkipReason, int] = {}
        for skip in self.skipped:
            counts[skip.reason] = counts.get(skip.reason, 0) + 1
        return counts

    def diff(self, context: int = 1) -> str:
        """Unified diff between the original and rewritten text."""
        lines = difflib.unified_diff(
            self.original.splitlines(keepends=True),
            self.content.splitlines(keepends=True),
            fromfile=f"a/{self.file_path}",
            tofile=f"b/{self.file_path}",
            n=context,
        )
        return "".join(lines)


@dataclass
class EmitOutcome:
    """Result of emitting the stylesheet."""

    destination: str
    css: str
    rule_count: int
    compressed: bool = False
    dry_run: bool = False
    written: bool = False
