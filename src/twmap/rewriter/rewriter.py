"""Rewriter: replaces class-strings with short names, byte-range exact."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from twmap.errors import WriteError
from twmap.model.mapping import ClassMapping
from twmap.model.occurrence import ClassOccurrence
from twmap.model.outcome import Replacement, RewriteOutcome, Skip, SkipReason
from twmap.parser import read_source

__all__ = ["plan", "rewrite", "rewrite_file"]


def _as_mapping(mapping: ClassMapping | Mapping[str, str]) -> ClassMapping:
    if isinstance(mapping, ClassMapping):
        return mapping
    return ClassMapping(dict(mapping))


def plan(
    content: str,
    occurrences: Iterable[ClassOccurrence],
    mapping: ClassMapping | Mapping[str, str],
) -> tuple[list[Replacement], list[Skip]]:
    """Decide which occurrences to replace and which to leave alone.

    Replacements come back sorted by ascending start offset. Raises
    ``ValueError`` if two occurrence ranges overlap.
    """
    mapping = _as_mapping(mapping)
    data = content.encode("utf-8")
    replacements: list[Replacement] = []
    skipped: list[Skip] = []
    last_end = 0

    for occ in sorted(occurrences, key=lambda o: o.byte_range):
        start, end = occ.byte_range
        if start < last_end:
            raise ValueError(
                f"{occ.file_path}: overlapping occurrences at byte {start}"
            )
        last_end = end

        if not occ.safe or occ.raw_value is None:
            skipped.append(Skip(occ, SkipReason.DYNAMIC))
            continue
        class_string = occ.class_string or ""
        short_name = mapping.get(class_string)
        if short_name is None:
            skipped.append(Skip(occ, SkipReason.UNMAPPED))
            continue
        original = occ.source_text() or ""
        if end > len(data) or data[start:end] != original.encode("utf-8"):
            skipped.append(Skip(occ, SkipReason.STALE))
            continue
        replacements.append(
            Replacement(
                byte_range=(start, end),
                original=original,
                replacement=f"{occ.opener}{short_name}{occ.closer}",
                class_string=class_string,
                short_name=short_name,
            )
        )
    return replacements, skipped


def _apply(data: bytes, replacements: list[Replacement]) -> bytes:
    """Rebuild *data* with each range swapped; untouched bytes are copied."""
    pieces: list[bytes] = []
    cursor = 0
    for rep in replacements:
        start, end = rep.byte_range
        pieces.append(data[cursor:start])
        pieces.append(rep.replacement.encode("utf-8"))
        cursor = end
    pieces.append(data[cursor:])
    return b"".join(pieces)


def rewrite(
    content: str,
    occurrences: Iterable[ClassOccurrence],
    mapping: ClassMapping | Mapping[str, str],
    dry_run: bool = False,
    file_path: str | None = None,
) -> RewriteOutcome:
    """Compute the rewritten text of one file. Pure: never touches disk."""
    occurrences = list(occurrences)
    if file_path is None:
        file_path = occurrences[0].file_path if occurrences else "<string>"
    replacements, skipped = plan(content, occurrences, mapping)
    new_content = content
    if replacements:
        new_content = _apply(content.encode("utf-8"), replacements).decode("utf-8")
    return RewriteOutcome(
        file_path=file_path,
        original=content,
        content=new_content,
        replacements=replacements,
        skipped=skipped,
        dry_run=dry_run,
    )


def rewrite_file(
    path: str | Path,
    occurrences: Iterable[ClassOccurrence],
    mapping: ClassMapping | Mapping[str, str],
    dry_run: bool = False,
    content: str | None = None,
) -> RewriteOutcome:
    """Rewrite *path* in place (unless *dry_run*).

    *content* is the text the occurrences were parsed from; it is read from
    disk when omitted. Raises :class:`FileReadError` or :class:`WriteError`.
    """
    if content is None:
        content = read_source(path)
    outcome = rewrite(content, occurrences, mapping, dry_run=dry_run, file_path=str(path))
    if dry_run or not outcome.changed:
        return outcome
    try:
        Path(path).write_bytes(outcome.content.encode("utf-8"))
    except OSError as exc:
        raise WriteError(str(path), str(exc)) from exc
    outcome.written = True
    return outcome
