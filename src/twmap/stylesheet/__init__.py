from twmap.stylesheet.compress import minify_css
from twmap.stylesheet.emitter import (
    build_stylesheet,
    emit,
    orphaned_names,
    render_stylesheet,
    summarize,
)
from twmap.stylesheet.model import ApplyRule, Stylesheet
from twmap.stylesheet.parser import parse_stylesheet

__all__ = [
    "ApplyRule",
    "Stylesheet",
    "build_stylesheet",
    "emit",
    "minify_css",
    "orphaned_names",
    "parse_stylesheet",
    "render_stylesheet",
    "summarize",
]
