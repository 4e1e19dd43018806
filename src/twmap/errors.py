"""Error types for twmap runs.

Per-file errors (``FileReadError``, ``ParseError``, ``WriteError`` for a
rewritten source file) are captured on that file's result by the processor.
``ConfigurationError`` and a ``WriteError`` for the stylesheet end the run.
"""


class TwmapError(Exception):
    """Base class for all twmap errors."""


class FileReadError(TwmapError):
    """Raised when a source file cannot be opened or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: cannot read file: {reason}")


class ParseError(TwmapError):
    """Raised when source markup is malformed beyond recovery."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class WriteError(TwmapError):
    """Raised when a rewritten file or the stylesheet cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: cannot write file: {reason}")


class ConfigurationError(TwmapError):
    """Raised when the run configuration is invalid."""
