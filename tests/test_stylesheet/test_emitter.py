"""Tests for building, rendering and emitting the generated stylesheet."""

import logging

import pytest

from twmap.errors import WriteError
from twmap.model.mapping import ClassMapping
from twmap.stylesheet import (
    build_stylesheet,
    emit,
    orphaned_names,
    render_stylesheet,
    summarize,
)
from twmap.stylesheet.emitter import HEADER


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


class TestBuildStylesheet:
    def test_one_rule_per_pair(self):
        ss = build_stylesheet({"flex p-4": "tw-0", "text-sm": "tw-1"})
        assert ss.selectors() == ["tw-0", "tw-1"]
        assert ss.rules[0].tokens == ("flex", "p-4")
        assert ss.aliases == {}

    def test_canonical_duplicates_collapse_to_first(self):
        ss = build_stylesheet({"flex p-4": "tw-a", "p-4 flex": "tw-b", "m-2": "tw-c"})
        assert ss.selectors() == ["tw-a", "tw-c"]
        assert ss.rules[0].class_string == "flex p-4"
        assert ss.aliases == {"tw-b": "tw-a"}

    def test_shared_name_is_not_an_alias(self):
        ss = build_stylesheet({"flex p-4": "tw-a", "p-4 flex": "tw-a"})
        assert ss.selectors() == ["tw-a"]
        assert ss.aliases == {}

    def test_class_mapping_order_kept(self):
        mapping = ClassMapping()
        mapping.add("z-10", "tw-2")
        mapping.add("a-1", "tw-1")
        assert build_stylesheet(mapping).selectors() == ["tw-2", "tw-1"]

    def test_empty_mapping(self):
        assert build_stylesheet({}).rules == []

    def test_orphaned_names(self):
        assert orphaned_names({"a b": "tw-0", "b a": "tw-1", "c": "tw-2"}) == ["tw-1"]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRender:
    def test_render_format(self):
        css = render_stylesheet(build_stylesheet({"flex p-4": "tw-0", "text-sm": "tw-1"}))
        assert css == (
            f"{HEADER}\n"
            ".tw-0 { @apply flex p-4; }\n"
            ".tw-1 { @apply text-sm; }\n"
        )

    def test_empty_stylesheet_has_header_only(self):
        assert render_stylesheet(build_stylesheet({})) == f"{HEADER}\n"

    def test_custom_directive(self):
        css = render_stylesheet(build_stylesheet({"flex": "tw-0"}), directive="tw")
        assert ".tw-0 { @tw flex; }" in css

    def test_deterministic(self):
        mapping = {"b c": "tw-1", "a": "tw-0"}
        first = render_stylesheet(build_stylesheet(mapping))
        second = render_stylesheet(build_stylesheet(dict(mapping)))
        assert first == second


# ---------------------------------------------------------------------------
# Emitting
# ---------------------------------------------------------------------------


class TestEmit:
    def test_writes_file(self, tmp_path):
        dest = tmp_path / "out.css"
        outcome = emit({"flex": "tw-0"}, dest)
        assert outcome.written
        assert outcome.rule_count == 1
        assert dest.read_text(encoding="utf-8") == outcome.css
        assert ".tw-0 { @apply flex; }" in outcome.css

    def test_creates_parent_directories(self, tmp_path):
        dest = tmp_path / "build" / "css" / "twmap.css"
        emit({"flex": "tw-0"}, dest)
        assert dest.exists()

    def test_compressed(self, tmp_path):
        dest = tmp_path / "out.css"
        outcome = emit({"flex p-4": "tw-0", "m-2": "tw-1"}, dest, compress=True)
        assert outcome.compressed
        assert dest.read_text(encoding="utf-8") == ".tw-0{@apply flex p-4}.tw-1{@apply m-2}"

    def test_custom_compressor(self, tmp_path):
        dest = tmp_path / "out.css"
        emit({"flex": "tw-0"}, dest, compress=True, compressor=str.upper)
        assert "@APPLY FLEX" in dest.read_text(encoding="utf-8")

    def test_dry_run_writes_nothing(self, tmp_path):
        dest = tmp_path / "out.css"
        outcome = emit({"flex": "tw-0"}, dest, compress=True, dry_run=True)
        assert outcome.dry_run
        assert not outcome.written
        assert not outcome.compressed
        assert not dest.exists()
        assert ".tw-0 { @apply flex; }" in outcome.css

    def test_write_failure(self, tmp_path):
        with pytest.raises(WriteError, match="cannot write"):
            emit({"flex": "tw-0"}, tmp_path)

    def test_alias_warning_logged(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="twmap.stylesheet"):
            emit({"a b": "tw-0", "b a": "tw-1"}, tmp_path / "out.css")
        assert "tw-1" in caplog.text
        assert ".tw-0" in caplog.text


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


class TestSummarize:
    def test_counts(self):
        text = summarize({"flex p-4": "tw-0", "p-4 flex": "tw-1", "m-2 p-4": "tw-2"}, 7)
        assert text.splitlines() == [
            "Total occurrences: 7",
            "Unique class combinations: 3",
            "Stylesheet rules: 2",
            "Distinct utility tokens: 3",
        ]

    def test_without_occurrences(self):
        text = summarize({})
        assert "Total occurrences" not in text
        assert "Unique class combinations: 0" in text
