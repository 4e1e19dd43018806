"""Stylesheet emitter: one apply rule per canonical class-string group."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from twmap.errors import WriteError
from twmap.model.mapping import ClassMapping, canonical_form, split_tokens
from twmap.model.outcome import EmitOutcome
from twmap.stylesheet.compress import minify_css
from twmap.stylesheet.model import ApplyRule, Stylesheet

__all__ = [
    "HEADER",
    "build_stylesheet",
    "emit",
    "orphaned_names",
    "render_stylesheet",
    "summarize",
]

HEADER = "/* Generated by twmap. Do not edit by hand. */"

Compressor = Callable[[str], str]

log = logging.getLogger("twmap.stylesheet")


def _pairs(mapping: ClassMapping | Mapping[str, str]) -> list[tuple[str, str]]:
    if isinstance(mapping, ClassMapping):
        return mapping.items()
    return list(mapping.items())


def build_stylesheet(mapping: ClassMapping | Mapping[str, str]) -> Stylesheet:
    """Group *mapping* by canonical form; the first pair of a group wins."""
    groups: dict[str, tuple[str, str]] = {}
    aliases: dict[str, str] = {}
    for class_string, short_name in _pairs(mapping):
        key = canonical_form(class_string)
        if not key:
            continue
        first = groups.get(key)
        if first is None:
            groups[key] = (class_string, short_name)
        elif first[1] != short_name:
            aliases[short_name] = first[1]
    rules = [
        ApplyRule(selector=short_name, tokens=tuple(split_tokens(class_string)))
        for class_string, short_name in groups.values()
    ]
    return Stylesheet(rules=rules, aliases=aliases)


def orphaned_names(mapping: ClassMapping | Mapping[str, str]) -> list[str]:
    """Short names that get no rule of their own after canonical grouping."""
    return list(build_stylesheet(mapping).aliases)


def render_stylesheet(stylesheet: Stylesheet, directive: str = "apply") -> str:
    lines = [HEADER]
    lines.extend(rule.render(directive) for rule in stylesheet.rules)
    return "\n".join(lines) + "\n"


def emit(
    mapping: ClassMapping | Mapping[str, str],
    destination: str | Path,
    compress: bool = False,
    *,
    dry_run: bool = False,
    directive: str = "apply",
    compressor: Compressor = minify_css,
) -> EmitOutcome:
    """Write the stylesheet for *mapping* to *destination*.

    In dry-run mode nothing is compressed or written; the outcome reports
    where the file would have gone. Raises :class:`WriteError`.
    """
    stylesheet = build_stylesheet(mapping)
    for alias, selector in stylesheet.aliases.items():
        log.warning(
            "%s has no rule of its own: its tokens are emitted under .%s",
            alias,
            selector,
        )
    css = render_stylesheet(stylesheet, directive)
    outcome = EmitOutcome(
        destination=str(destination),
        css=css,
        rule_count=len(stylesheet.rules),
        dry_run=dry_run,
    )
    if dry_run:
        log.info("Dry run: stylesheet would be written to %s", destination)
        return outcome

    if compress:
        outcome.css = compressor(css)
        outcome.compressed = True

    path = Path(destination)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(outcome.css, encoding="utf-8")
    except OSError as exc:
        raise WriteError(str(destination), str(exc)) from exc
    outcome.written = True
    log.info("Wrote %d rule(s) to %s", outcome.rule_count, destination)
    return outcome


def summarize(
    mapping: ClassMapping | Mapping[str, str], occurrences: int | None = None
) -> str:
    """Human-readable counts for *mapping*. No side effects."""
    pairs = _pairs(mapping)
    stylesheet = build_stylesheet(mapping)
    tokens = {token for class_string, _ in pairs for token in split_tokens(class_string)}
    lines = []
    if occurrences is not None:
        lines.append(f"Total occurrences: {occurrences}")
    lines.extend(
        [
            f"Unique class combinations: {len(pairs)}",
            f"Stylesheet rules: {len(stylesheet.rules)}",
            f"Distinct utility tokens: {len(tokens)}",
        ]
    )
    return "\n".join(lines)
