"""Processor: parse every file, build one mapping, rewrite, emit the stylesheet.

Parsing and rewriting fan out over a thread pool. Between them sits the
single merge point: results are ordered by file path and folded into the
mapping on the calling thread, so incremental numbering is reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TypeVar

from twmap.config import TwmapConfig, validate_config
from twmap.discovery import find_files
from twmap.errors import FileReadError, WriteError
from twmap.model.mapping import ClassMapping
from twmap.model.occurrence import ParseResult
from twmap.model.outcome import RewriteOutcome
from twmap.model.report import FileFailure, RunReport
from twmap.naming import ClassNameGenerator
from twmap.parser import file_kind_for, parse, read_source
from twmap.rewriter import rewrite_file
from twmap.stylesheet import emit, minify_css, parse_stylesheet

T = TypeVar("T")
R = TypeVar("R")


class Processor:
    """One twmap run over a configured set of files.

    Each instance owns its name generator and mapping; call :meth:`reset`
    before reusing an instance for an unrelated run.
    """

    def __init__(
        self,
        config: TwmapConfig,
        *,
        dry_run: bool = False,
        max_workers: int | None = None,
        root: str | Path = ".",
        logger: logging.Logger | None = None,
        compressor: Callable[[str], str] = minify_css,
    ) -> None:
        self.config = validate_config(config)
        self.dry_run = dry_run
        self.max_workers = max_workers
        self.root = Path(root)
        self.output_path = self.root / config.output
        self.compressor = compressor
        self.log = logger or logging.getLogger("twmap")
        self.generator = ClassNameGenerator(
            config.generation_mode, config.prefix, canonical=config.canonical_names
        )
        self._mapping = ClassMapping()
        self._final: list[str] = []

    # --- public API -------------------------------------------------------------

    def run(self) -> RunReport:
        """Discover the configured files and process them."""
        self.log.info("Scanning files...")
        files = find_files(self.config.input, self.config.ignore, self.root)
        self.log.info("Found %d file(s) to process", len(files))
        return self.process_files(files)

    def process_files(self, paths: Iterable[str | Path]) -> RunReport:
        """Run the whole pipeline over *paths*.

        Per-file read, parse and write failures are recorded on the report.
        Raises :class:`WriteError` if the stylesheet cannot be written.
        """
        files = sorted({str(p) for p in paths})
        report = RunReport(files=files, dry_run=self.dry_run)

        self.log.info("Parsing class names...")
        sources: dict[str, str] = {}
        for result, content in self._fan_out(self._parse_one, files):
            report.parse_results.append(result)
            if result.success and content is not None:
                sources[result.file_path] = content
            else:
                stage = result.stage or "parse"
                report.failures.append(
                    FileFailure(result.file_path, stage, result.error or "")
                )
                self.log.warning("%s failed: %s", stage.capitalize(), result.error)

        parsed = [r for r in report.parse_results if r.success]
        if self.config.merge_existing:
            self._seed_from_stylesheet()
        self._collect_final(parsed)
        if self._final and not self.config.merge_existing:
            # Rules for names still used in sources must survive the rewrite.
            self._seed_from_stylesheet(keep=set(self._final))
        self._reserve_final()
        self._build_mappings(parsed)
        report.mapping = self.mappings
        report.final_names = list(self._final)

        self.log.info("Updating source files...")
        targets = [r for r in parsed if r.occurrences]
        for outcome, failure in self._fan_out(
            lambda r: self._rewrite_one(r, sources[r.file_path]), targets
        ):
            if outcome is not None:
                report.rewrites.append(outcome)
            if failure is not None:
                report.failures.append(failure)
                self.log.error("Failed to update %s: %s", failure.file_path, failure.message)
        report.rewrites.sort(key=lambda o: o.file_path)
        report.failures.sort(key=lambda f: f.file_path)

        self.log.info("Generating CSS file...")
        report.emit = emit(
            self._mapping,
            self.output_path,
            self.config.css_compressor,
            dry_run=self.dry_run,
            directive=self.config.directive,
            compressor=self.compressor,
        )
        return report

    @property
    def mappings(self) -> ClassMapping:
        return self._mapping.copy()

    def reset(self) -> None:
        self._mapping.clear()
        self._final.clear()
        self.generator.reset()

    # --- stages -----------------------------------------------------------------

    def _parse_one(self, file_path: str) -> tuple[ParseResult, str | None]:
        kind = file_kind_for(file_path)
        if kind is None:
            return (
                ParseResult.failed(
                    file_path, f"{file_path}: unsupported file type", stage="unsupported"
                ),
                None,
            )
        try:
            content = read_source(file_path)
        except FileReadError as exc:
            return ParseResult.failed(file_path, str(exc), kind=kind, stage="read"), None
        return parse(content, kind, file_path), content

    def _seed_from_stylesheet(self, keep: set[str] | None = None) -> None:
        """Load rules of the existing output; only selectors in *keep* if given."""
        path = self.output_path
        if not path.is_file():
            return
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.log.warning("Cannot merge existing stylesheet %s: %s", path, exc)
            return
        for rule in parse_stylesheet(text, self.config.directive):
            if keep is not None and rule.selector not in keep:
                continue
            try:
                self.generator.seed(rule.class_string, rule.selector)
                self._mapping.add(rule.class_string, rule.selector)
            except ValueError as exc:
                self.log.warning("Ignoring existing rule .%s: %s", rule.selector, exc)
        self.log.info("Merged %d existing mapping(s) from %s", len(self._mapping), path)

    def _collect_final(self, results: list[ParseResult]) -> None:
        """Record class-strings that are already short names from an earlier run."""
        for result in results:
            for class_string in result.class_strings:
                if class_string in self._mapping or class_string in self._final:
                    continue
                if self.generator.is_generated(class_string):
                    self._final.append(class_string)

    def _reserve_final(self) -> None:
        known = set(self._mapping.names())
        for name in self._final:
            self.generator.reserve(name)
            if name not in known:
                self.log.warning(
                    "%s is used in sources but has no rule in %s", name, self.output_path
                )

    def _build_mappings(self, results: list[ParseResult]) -> None:
        """Fold class-strings into the mapping in file-then-occurrence order."""
        final = set(self._final)
        for result in results:
            for class_string in result.class_strings:
                if class_string in self._mapping or class_string in final:
                    continue
                self._mapping.add(class_string, self.generator.generate(class_string))
        self.log.info("Generated %d unique class mapping(s)", len(self._mapping))

    def _rewrite_one(
        self, result: ParseResult, content: str
    ) -> tuple[RewriteOutcome | None, FileFailure | None]:
        try:
            outcome = rewrite_file(
                result.file_path,
                result.occurrences,
                self._mapping,
                dry_run=self.dry_run,
                content=content,
            )
        except WriteError as exc:
            return None, FileFailure(result.file_path, "write", str(exc))
        return outcome, None

    def _fan_out(self, fn: Callable[[T], R], items: list[T]) -> list[R]:
        """Run *fn* over *items* in a thread pool; results keep *items* order."""
        if not items:
            return []
        results: dict[int, R] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {pool.submit(fn, item): i for i, item in enumerate(items)}
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return [results[i] for i in range(len(items))]
