# ABOUTME: CLI package for comicmeta, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from comicmeta.cli.commands import extract_cmd, inspect_cmd, restore_cmd


def _configure_logging(verbosity: int) -> None:
    """Route log records through Rich: -v for INFO, -vv for DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group(context_settings={"auto_envvar_prefix": "COMICMETA"})
@click.version_option(package_name="comicmeta")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """comicmeta - extract ComicInfo metadata from CBZ/CBR comics into reader settings."""
    _configure_logging(verbose)


cli.add_command(extract_cmd.extract)
cli.add_command(inspect_cmd.inspect)
cli.add_command(restore_cmd.restore)
