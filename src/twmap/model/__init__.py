"""twmap model layer -- public type re-exports."""

from twmap.model.mapping import (
    ClassMapping,
    canonical_form,
    normalize_class_string,
    split_tokens,
)
from twmap.model.occurrence import (
    Classification,
    ClassOccurrence,
    FileKind,
    ParseResult,
    ValueKind,
)
from twmap.model.outcome import EmitOutcome, Replacement, RewriteOutcome, Skip, SkipReason
from twmap.model.report import FileFailure, RunReport

__all__ = [
    # mapping
    "ClassMapping",
    "canonical_form",
    "normalize_class_string",
    "split_tokens",
    # occurrence
    "FileKind",
    "ValueKind",
    "Classification",
    "ClassOccurrence",
    "ParseResult",
    # outcome
    "SkipReason",
    "Replacement",
    "Skip",
    "RewriteOutcome",
    "EmitOutcome",
    # report
    "FileFailure",
    "RunReport",
]
