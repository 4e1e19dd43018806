"""Stylesheet model: ApplyRule and Stylesheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ApplyRule:
    """One rule composing utility tokens under a generated class selector.

    ``selector`` is the short name without the leading dot; ``tokens`` keep
    the order of the representative class-string.
    """

    selector: str
    tokens: tuple[str, ...]

    @property
    def class_string(self) -> str:
        return " ".join(self.tokens)

    def render(self, directive: str = "apply") -> str:
        return f".{self.selector} {{ @{directive} {self.class_string}; }}"


@dataclass(frozen=True)
class Stylesheet:
    """Rules in group-first-encountered order.

    ``aliases`` maps every short name folded into another group's rule to
    the selector that now carries its tokens.
    """

    rules: list[ApplyRule]
    aliases: dict[str, str] = field(default_factory=dict)

    def selectors(self) -> list[str]:
        return [rule.selector for rule in self.rules]
