"""Lightweight CSS minification for the generated stylesheet."""

from __future__ import annotations

import re

COMMENT_RE = re.compile(r"/\*[^!][\s\S]*?\*/")
WHITESPACE_RE = re.compile(r"\s+")
PUNCTUATION_RE = re.compile(r"\s*([{};,>])\s*")


def minify_css(source: str) -> str:
    """Strip comments, collapse whitespace and tighten punctuation.

    Spaces between ``@apply`` tokens are significant and survive.
    """
    stripped = COMMENT_RE.sub("", source)
    condensed = WHITESPACE_RE.sub(" ", stripped)
    tightened = PUNCTUATION_RE.sub(r"\1", condensed)
    return tightened.replace(";}", "}").strip()
