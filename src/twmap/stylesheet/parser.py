"""Parser for stylesheets written by an earlier run.

Syntax example:
    /* Generated by twmap. Do not edit by hand. */
    .tw-3f9a1c { @apply flex items-center p-4; }
    .tw-0 { @apply text-sm; }

Only single-selector class rules whose body is one directive are read back;
anything else in the file is ignored.
"""

from __future__ import annotations

import re

from twmap.stylesheet.model import ApplyRule

__all__ = ["parse_stylesheet"]

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# Matches a complete rule: .selector { @directive tokens; }
_RULE_RE = re.compile(
    r"""
    \.(?P<selector>-?[A-Za-z_][A-Za-z0-9_-]*)   # generated class selector
    \s*\{\s*                                    # opening brace
    @(?P<directive>[A-Za-z][A-Za-z0-9-]*)       # directive name
    \s+(?P<tokens>[^;{}]+?)                     # utility tokens
    \s*;?\s*                                    # optional semicolon
    \}                                          # closing brace
    """,
    re.VERBOSE,
)


def parse_stylesheet(source: str, directive: str = "apply") -> list[ApplyRule]:
    """Parse generated stylesheet text back into rules, in source order.

    Rules using a directive other than *directive* are skipped.
    """
    rules: list[ApplyRule] = []
    for match in _RULE_RE.finditer(_COMMENT_RE.sub("", source)):
        if match.group("directive") != directive:
            continue
        tokens = tuple(match.group("tokens").split())
        if tokens:  # skip rules with no tokens
            rules.append(ApplyRule(selector=match.group("selector"), tokens=tokens))
    return rules
