# ABOUTME: Shared Click options for comicmeta CLI commands.
# ABOUTME: Provides reusable decorators for isolation mode, ToC writing, and prompt answers.

import click

from comicmeta.core.isolation import InlineIsolation, Isolation, ProcessIsolation

ISOLATION_MODES: dict[str, type] = {
    "process": ProcessIsolation,
    "inline": InlineIsolation,
}

isolation_option = click.option(
    "--isolation",
    type=click.Choice(sorted(ISOLATION_MODES)),
    default="process",
    show_default=True,
    help="How each comic is sandboxed: a worker process, or an in-process exception guard.",
)

toc_option = click.option(
    "--toc/--no-toc",
    default=True,
    help="Write a handmade table of contents from page bookmarks (default: --toc).",
)

yes_option = click.option(
    "-y",
    "--yes",
    "assume_yes",
    is_flag=True,
    default=False,
    help="Answer every prompt with its default choice.",
)


def make_isolation(mode: str) -> Isolation:
    """Build the isolation strategy named on the command line."""
    return ISOLATION_MODES[mode]()
