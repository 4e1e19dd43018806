"""File discovery: glob patterns with brace expansion and ignore filters."""

from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Iterable
from pathlib import Path

__all__ = ["expand_braces", "find_files", "is_ignored"]

log = logging.getLogger("twmap")

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives: ``*.{js,ts}`` -> ``*.js``, ``*.ts``."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def _strip_dot(pattern: str) -> str:
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern


def is_ignored(relative: str, ignore: Iterable[str]) -> bool:
    """True if the posix path *relative* matches any ignore pattern."""
    for raw in ignore:
        for pattern in expand_braces(_strip_dot(raw)):
            if fnmatch.fnmatch(relative, pattern):
                return True
            # "**/x" also matches "x" at the top level.
            if pattern.startswith("**/") and fnmatch.fnmatch(relative, pattern[3:]):
                return True
    return False


def _glob(pattern: str, root: Path) -> Iterable[Path]:
    path = Path(pattern)
    if path.is_absolute():
        anchor = Path(path.anchor)
        return anchor.glob(str(path.relative_to(anchor)))
    return root.glob(pattern)


def find_files(
    patterns: Iterable[str], ignore: Iterable[str] = (), root: str | Path = "."
) -> list[Path]:
    """Absolute paths of files matching *patterns*, minus *ignore*, sorted."""
    base = Path(root).resolve()
    ignore = list(ignore)
    found: set[Path] = set()
    for raw in patterns:
        for pattern in expand_braces(_strip_dot(raw)):
            try:
                matches = list(_glob(pattern, base))
            except (ValueError, OSError) as exc:
                log.warning("Could not process glob pattern %r: %s", raw, exc)
                continue
            for match in matches:
                if not match.is_file():
                    continue
                resolved = match.resolve()
                try:
                    relative = resolved.relative_to(base).as_posix()
                except ValueError:
                    relative = resolved.as_posix()
                if is_ignored(relative, ignore):
                    continue
                found.add(resolved)
    return sorted(found)
