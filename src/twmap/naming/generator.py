"""Short-name generation for class-strings.

One :class:`ClassNameGenerator` per run. It owns the allocation table, so
the same class-string always gets the same name and two different
class-strings never share one.
"""

from __future__ import annotations

import hashlib
import re
from enum import StrEnum

from twmap.model.mapping import canonical_form, normalize_class_string

HASH_WIDTH = 6
READABLE_MAX_LENGTH = 24

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]")

# Shape of a generated name once the prefix is removed.
_GENERATED_SHAPES: dict[str, re.Pattern[str]] = {
    "hash": re.compile(r"[0-9a-f]{%d,64}(?:-\d+)?" % HASH_WIDTH),
    "incremental": re.compile(r"\d+"),
    "readable": re.compile(r"[a-z0-9]{1,%d}(?:-\d+)?" % READABLE_MAX_LENGTH),
}


class GenerationMode(StrEnum):
    """How short names are derived from class-strings."""

    HASH = "hash"
    INCREMENTAL = "incremental"
    READABLE = "readable"


class ClassNameGenerator:
    """Allocate short names under one mode and prefix.

    Args:
        mode: Generation mode.
        prefix: Prepended verbatim to every name.
        canonical: Key allocations by canonical form (sorted tokens) instead
            of the class-string as written.
    """

    def __init__(
        self,
        mode: GenerationMode | str = GenerationMode.HASH,
        prefix: str = "tw-",
        *,
        canonical: bool = False,
    ) -> None:
        self.mode = GenerationMode(mode)
        self.prefix = prefix
        self.canonical = canonical
        self._names: dict[str, str] = {}
        self._taken: set[str] = set()
        self._counter = 0

    # --- allocation -----------------------------------------------------------

    def generate(self, class_string: str) -> str:
        """Short name for *class_string*, allocating one on first sight."""
        key = self._key(class_string)
        name = self._names.get(key)
        if name is not None:
            return name
        if self.mode is GenerationMode.HASH:
            name = self._hash_name(key)
        elif self.mode is GenerationMode.INCREMENTAL:
            name = self._incremental_name()
        else:
            name = self._readable_name(key)
        self._names[key] = name
        self._taken.add(name)
        return name

    def seed(self, class_string: str, name: str) -> None:
        """Register an allocation made by an earlier run."""
        key = self._key(class_string)
        existing = self._names.get(key)
        if existing == name:
            return
        if existing is not None or name in self._taken:
            raise ValueError(f"Cannot seed {name!r} for {key!r}: already allocated")
        self._names[key] = name
        self.reserve(name)

    def reserve(self, name: str) -> None:
        """Keep *name* out of future allocations without binding a class-string.

        Used for short names already present in sources whose class-string
        is no longer known.
        """
        self._taken.add(name)
        if self.mode is GenerationMode.INCREMENTAL and name.startswith(self.prefix):
            suffix = name[len(self.prefix) :]
            if suffix.isdigit():
                self._counter = max(self._counter, int(suffix) + 1)

    def reset(self) -> None:
        """Forget every allocation."""
        self._names.clear()
        self._taken.clear()
        self._counter = 0

    # --- queries --------------------------------------------------------------

    def is_generated(self, class_string: str) -> bool:
        """True if *class_string* is already a short name, not an original."""
        tokens = class_string.split()
        if len(tokens) != 1:
            return False
        token = tokens[0]
        if token in self._taken:
            return True
        if not self.prefix or not token.startswith(self.prefix):
            return False
        return bool(_GENERATED_SHAPES[self.mode.value].fullmatch(token[len(self.prefix) :]))

    def allocations(self) -> dict[str, str]:
        return dict(self._names)

    def __len__(self) -> int:
        return len(self._names)

    # --- strategies -----------------------------------------------------------

    def _key(self, class_string: str) -> str:
        if self.canonical:
            return canonical_form(class_string)
        return normalize_class_string(class_string)

    def _hash_name(self, key: str) -> str:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        for width in range(HASH_WIDTH, len(digest) + 1):
            name = f"{self.prefix}{digest[:width]}"
            if name not in self._taken:
                return name
        return self._suffixed(f"{self.prefix}{digest}")

    def _incremental_name(self) -> str:
        while True:
            name = f"{self.prefix}{self._counter}"
            self._counter += 1
            if name not in self._taken:
                return name

    def _readable_name(self, key: str) -> str:
        slug = _SLUG_STRIP_RE.sub("", key.lower())[:READABLE_MAX_LENGTH] or "c"
        name = f"{self.prefix}{slug}"
        if name not in self._taken:
            return name
        return self._suffixed(name)

    def _suffixed(self, base: str) -> str:
        n = 2
        while f"{base}-{n}" in self._taken:
            n += 1
        return f"{base}-{n}"
