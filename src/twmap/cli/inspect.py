"""CLI command: twmap inspect -- show the class occurrences in one file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from twmap.parser import file_kind_for, parse_file


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
def inspect(source: str) -> None:
    """Parse a source file and list its class attribute values.

    Shows each occurrence's byte range, attribute, classification and
    class-string. Nothing is modified.
    """
    path = Path(source)
    kind = file_kind_for(path)
    if kind is None:
        click.echo(f"Unsupported file type: {path.suffix or path.name}", err=True)
        sys.exit(1)

    result = parse_file(path, kind)
    if not result.success:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    click.echo(f"File: {path}")
    click.echo(f"Kind: {kind.value}")
    click.echo(f"Occurrences: {len(result.occurrences)}")
    click.echo()

    for occ in result.occurrences:
        start, end = occ.byte_range
        parts = [f"  [{start}:{end}]", occ.attribute, occ.kind.value]
        if occ.safe:
            parts.append(f'"{occ.class_string}"')
        click.echo("  ".join(parts))
