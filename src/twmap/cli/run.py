"""CLI command: twmap run -- rewrite sources and generate the stylesheet."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click

from twmap.config import TwmapConfig, load_config, validate_config
from twmap.errors import ConfigurationError, WriteError
from twmap.model.report import RunReport
from twmap.naming import GenerationMode
from twmap.processor import Processor
from twmap.stylesheet import summarize


def _print_report(report: RunReport, config: TwmapConfig, show_diff: bool) -> None:
    click.echo()
    click.echo(report.summary())
    click.echo()
    click.echo(summarize(report.mapping, report.occurrence_count))

    if report.failures:
        click.echo(f"\nFailed files ({len(report.failures)}):", err=True)
        for failure in report.failures:
            click.echo(f"  - {failure.file_path}: {failure}", err=True)

    if report.dry_run:
        changed = [r for r in report.rewrites if r.replaced_count]
        click.echo(f"\nDry run summary: {len(changed)} file(s) would be updated.")
        for outcome in changed:
            click.echo(
                f"  - {outcome.file_path} "
                f"({outcome.replaced_count} replaced, {outcome.skipped_count} skipped)"
            )
            if show_diff:
                click.echo(outcome.diff())
        click.echo(f"Dry run: CSS file would be generated at {config.output}")
    else:
        click.echo(f"\nProcess completed! CSS file generated at: {config.output}")


@click.command()
@click.option("-c", "--config", "config_path", type=click.Path(), help="Path to config file")
@click.option("-i", "--input", "inputs", multiple=True, help="Input file pattern (repeatable)")
@click.option("-o", "--output", default=None, help="Output CSS file path")
@click.option(
    "-m",
    "--mode",
    type=click.Choice([m.value for m in GenerationMode]),
    default=None,
    help="Class name generation mode",
)
@click.option("-p", "--prefix", default=None, help="Prefix for generated class names")
@click.option("--dry-run", is_flag=True, help="Preview changes without modifying files")
@click.option("--diff", "show_diff", is_flag=True, help="With --dry-run, print unified diffs")
@click.option("--compress/--no-compress", default=None, help="Minify the generated CSS")
@click.option("--merge/--no-merge", default=None, help="Reuse rules from an existing output file")
@click.option("-j", "--workers", type=int, default=None, help="Worker threads")
def run(
    config_path: str | None,
    inputs: tuple[str, ...],
    output: str | None,
    mode: str | None,
    prefix: str | None,
    dry_run: bool,
    show_diff: bool,
    compress: bool | None,
    merge: bool | None,
    workers: int | None,
) -> None:
    """Extract class strings, rewrite sources and write the stylesheet."""
    # Step 1: Configuration
    try:
        config = load_config(config_path)
        config = config.with_overrides(
            input=inputs or None,
            output=output,
            mode=mode,
            prefix=prefix,
            css_compressor=compress,
            merge_existing=merge,
        )
        validate_config(config)
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo("Starting twmap process...")
    click.echo(f"Config: {json.dumps(asdict(config), indent=2)}")
    if dry_run:
        click.echo("Dry run mode - no files will be modified")

    # Step 2: Process
    processor = Processor(config, dry_run=dry_run, max_workers=workers, root=Path.cwd())
    try:
        report = processor.run()
    except WriteError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    # Step 3: Report
    _print_report(report, config, show_diff)
