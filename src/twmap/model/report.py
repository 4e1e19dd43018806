"""Run report: aggregated per-file results of one processor run."""

from __future__ import annotations

from dataclasses import dataclass, field

from twmap.model.mapping import ClassMapping
from twmap.model.occurrence import ParseResult
from twmap.model.outcome import EmitOutcome, RewriteOutcome, SkipReason


@dataclass(frozen=True)
class FileFailure:
    """A per-file error captured at the file boundary."""

    file_path: str
    stage: str  # "read", "parse", "write"
    message: str

    def __str__(self) -> str:
        return f"{self.stage} failed: {self.message}"


@dataclass
class RunReport:
    """Everything one run produced, for summaries and tests."""

    files: list[str] = field(default_factory=list)
    parse_results: list[ParseResult] = field(default_factory=list)
    rewrites: list[RewriteOutcome] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    mapping: ClassMapping = field(default_factory=ClassMapping)
    final_names: list[str] = field(default_factory=list)
    emit: EmitOutcome | None = None
    dry_run: bool = False

    @property
    def files_scanned(self) -> int:
        return len(self.files)

    @property
    def occurrence_count(self) -> int:
        return sum(len(r.occurrences) for r in self.parse_results if r.success)

    @property
    def replaced_count(self) -> int:
        return sum(r.replaced_count for r in self.rewrites)

    @property
    def skipped_count(self) -> int:
        return sum(r.skipped_count for r in self.rewrites)

    def skipped_by_reason(self) -> dict[SkipReason, int]:
        totals: dict[SkipReason, int] = {}
        for rewrite in self.rewrites:
            for reason, count in rewrite.skip_counts().items():
                totals[reason] = totals.get(reason, 0) + count
        return totals

    @property
    def changed_files(self) -> list[str]:
        return [r.file_path for r in self.rewrites if r.changed]

    @property
    def succeeded(self) -> bool:
        """True when the stylesheet was produced (or planned in dry-run)."""
        return self.emit is not None

    def summary(self) -> str:
        lines = [
            f"Files scanned: {self.files_scanned}",
            f"Occurrences found: {self.occurrence_count}",
            f"Unique mappings: {len(self.mapping)}",
            f"Replaced: {self.replaced_count}",
            f"Skipped: {self.skipped_count}",
        ]
        for reason, count in sorted(
            self.skipped_by_reason().items(), key=lambda kv: kv[0].value
        ):
            lines.append(f"  {reason.value}: {count}")
        if self.final_names:
            lines.append(f"Already final: {len(self.final_names)}")
        if self.failures:
            lines.append(f"Failures: {len(self.failures)}")
        return "\n".join(lines)
