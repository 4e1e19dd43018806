"""Source parser: dispatches a file to the strategy for its dialect."""

from __future__ import annotations

from pathlib import Path

from twmap.errors import FileReadError, ParseError
from twmap.model.occurrence import ClassOccurrence, FileKind, ParseResult
from twmap.parser.component import parse_component
from twmap.parser.markup import parse_markup

__all__ = [
    "EXTENSION_KINDS",
    "ParseError",
    "file_kind_for",
    "parse",
    "parse_file",
    "read_source",
]

EXTENSION_KINDS: dict[str, FileKind] = {
    ".html": FileKind.MARKUP,
    ".htm": FileKind.MARKUP,
    ".jsx": FileKind.COMPONENT,
    ".js": FileKind.COMPONENT,
    ".mjs": FileKind.COMPONENT,
    ".cjs": FileKind.COMPONENT,
    ".tsx": FileKind.TYPED_COMPONENT,
}


def file_kind_for(path: str | Path) -> FileKind | None:
    """Dialect for *path* by extension, or None if twmap does not handle it."""
    return EXTENSION_KINDS.get(Path(path).suffix.lower())


def occurrences_for(
    content: str, kind: FileKind, file_path: str = "<string>"
) -> list[ClassOccurrence]:
    """Run the strategy for *kind*; raises :class:`ParseError` on failure."""
    if kind is FileKind.MARKUP:
        return parse_markup(content, file_path)
    return parse_component(content, kind, file_path)


def parse(content: str, kind: FileKind, file_path: str = "<string>") -> ParseResult:
    """Parse one file's content into its class occurrences.

    Never raises for malformed input: failures come back as a
    :class:`ParseResult` whose ``error`` names the file and the detail.
    """
    try:
        occurrences = occurrences_for(content, kind, file_path)
    except ParseError as exc:
        detail = str(exc)
        if not detail.startswith(file_path):
            detail = f"{file_path}: {detail}"
        return ParseResult.failed(
            file_path, f"parse error: {detail}", kind=kind, stage="parse"
        )
    return ParseResult(file_path=file_path, occurrences=occurrences, kind=kind)


def read_source(path: str | Path) -> str:
    """Read a source file as UTF-8; raises :class:`FileReadError`."""
    try:
        # Bytes in, bytes out: line endings must survive a rewrite untouched.
        return Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(str(path), str(exc)) from exc


def parse_file(path: str | Path, kind: FileKind | None = None) -> ParseResult:
    """Read and parse *path*; read and parse failures are returned, not raised."""
    file_path = str(path)
    kind = kind or file_kind_for(path)
    if kind is None:
        return ParseResult.failed(
            file_path, f"{file_path}: unsupported file type", stage="unsupported"
        )
    try:
        content = read_source(path)
    except FileReadError as exc:
        return ParseResult.failed(file_path, str(exc), kind=kind, stage="read")
    return parse(content, kind, file_path)
