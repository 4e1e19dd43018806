"""Class mapping model: class-string to short name, plus canonical forms."""

from __future__ import annotations

from collections.abc import Iterator


def split_tokens(class_string: str) -> list[str]:
    """Split a class-string into its utility tokens, dropping empties."""
    return class_string.split()


def normalize_class_string(raw: str) -> str:
    """Collapse whitespace runs to single spaces, keeping token order."""
    return " ".join(raw.split())


def canonical_form(class_string: str) -> str:
    """Tokens sorted lexically and re-joined; used to dedupe stylesheet rules."""
    return " ".join(sorted(split_tokens(class_string)))


class ClassMapping:
    """Insertion-ordered mapping from class-string to generated short name.

    Lookups are whitespace-insensitive: ``"flex  p-4"`` finds the entry for
    ``"flex p-4"``. Each class-string maps to exactly one short name.
    """

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._names: dict[str, str] = {}
        if items:
            for class_string, name in items.items():
                self.add(class_string, name)

    def add(self, class_string: str, name: str) -> None:
        key = normalize_class_string(class_string)
        existing = self._names.get(key)
        if existing is not None and existing != name:
            raise ValueError(
                f"Class-string {key!r} already mapped to {existing!r}, not {name!r}"
            )
        self._names[key] = name

    def get(self, class_string: str) -> str | None:
        return self._names.get(normalize_class_string(class_string))

    def names(self) -> list[str]:
        return list(self._names.values())

    def items(self) -> list[tuple[str, str]]:
        return list(self._names.items())

    def copy(self) -> ClassMapping:
        clone = ClassMapping()
        clone._names = dict(self._names)
        return clone

    def clear(self) -> None:
        self._names.clear()

    def as_dict(self) -> dict[str, str]:
        return dict(self._names)

    def __contains__(self, class_string: object) -> bool:
        if not isinstance(class_string, str):
            return False
        return normalize_class_string(class_string) in self._names

    def __getitem__(self, class_string: str) -> str:
        return self._names[normalize_class_string(class_string)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ClassMapping):
            return self._names == other._names
        if isinstance(other, dict):
            return self._names == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ClassMapping({self._names!r})"
