"""CLI command: twmap init -- write a sample config file."""

from __future__ import annotations

from pathlib import Path

import click

from twmap.config import CONFIG_FILENAME, write_sample_config


@click.command()
@click.option(
    "--path",
    "config_path",
    default=CONFIG_FILENAME,
    show_default=True,
    help="Where to write the config file",
)
def init(config_path: str) -> None:
    """Create a sample twmap.toml config file."""
    target = Path(config_path)
    if not write_sample_config(target):
        click.echo(f"Config file already exists at: {target}")
        return
    click.echo(f"Sample config file created at: {target}")
    click.echo('Edit the config file to customize settings, then run "twmap run".')
