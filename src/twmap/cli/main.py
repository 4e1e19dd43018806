"""twmap CLI entry point: Click group with subcommands."""

import logging

import click

from twmap import __version__


@click.group()
@click.version_option(version=__version__, prog_name="twmap")
@click.option("-v", "--verbose", is_flag=True, help="Log debug details")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors")
def cli(verbose: bool, quiet: bool) -> None:
    """twmap - extract and optimize Tailwind utility classes."""
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from twmap.cli.init import init  # noqa: E402
from twmap.cli.inspect import inspect  # noqa: E402
from twmap.cli.run import run  # noqa: E402

cli.add_command(run)
cli.add_command(init)
cli.add_command(inspect)
