# ABOUTME: The `comicmeta extract` command for batch ComicInfo extraction.
# ABOUTME: Asks about subfolders and selection, then runs the batch with progress and Ctrl-C abort.

import contextlib
import signal
from collections.abc import Callable, Iterator
from pathlib import Path

import click
from rich.console import Console

from comicmeta.cli.interaction import ConsoleInteraction
from comicmeta.cli.options import isolation_option, make_isolation, toc_option, yes_option
from comicmeta.cli.selection import SelectionSession
from comicmeta.core.runner import BatchContext, BatchOutcome, CancelToken, process_directory, run_batch
from comicmeta.core.scanner import has_subdirectories, scan_for_comics
from comicmeta.core.selector import build_selection

SUBFOLDERS_MESSAGE = "Subfolders detected.\nAlso extract comic metadata from comics in subdirectories?"
SELECTION_MESSAGE = "Do you want to process the full directory or only a selection of files?"


@contextlib.contextmanager
def cancel_on_interrupt(token: CancelToken) -> Iterator[Callable[[], None]]:
    """Turn Ctrl-C into a cancellation request for the duration of a batch.

    Yields an `arm` callable. Until it is called, Ctrl-C raises
    KeyboardInterrupt as usual, so the start confirmation can still be
    aborted. Once armed, the file being processed is allowed to finish and
    the runner stops before the next one.
    """
    armed = False

    def _arm() -> None:
        nonlocal armed
        armed = True

    def _handler(signum, frame):
        if not armed:
            signal.default_int_handler(signum, frame)
        token.cancel()

    try:
        previous = signal.signal(signal.SIGINT, _handler)
    except ValueError:
        # Not in the main thread: leave Ctrl-C alone.
        yield _arm
        return

    try:
        yield _arm
    finally:
        signal.signal(signal.SIGINT, previous)


def _run_selection(
    root: Path, recursive: bool, context: BatchContext, ui: ConsoleInteraction,
) -> BatchOutcome | None:
    """Let the user pick comics from the scan, then run the batch on them."""
    comic_files = scan_for_comics(root, recursive)
    if not comic_files:
        ui.info("[yellow]No comic files (.cbr/.cbz) found[/yellow]")
        return None

    items = build_selection(comic_files, root, recursive)
    chosen = SelectionSession(items, console=ui.console).run()
    if chosen is None:
        return None
    if not chosen:
        ui.info("[yellow]No file selected[/yellow]")
        return None

    with cancel_on_interrupt(context.cancel) as arm:
        ui.on_progress = arm
        return run_batch(chosen, context)


@click.command("extract")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--recursive/--no-recursive",
    default=None,
    help="Include comics in subfolders (default: ask when subfolders exist).",
)
@click.option(
    "--select/--all",
    "select",
    default=None,
    help="Pick files from a list, or process the whole directory (default: ask).",
)
@isolation_option
@toc_option
@yes_option
def extract(
    directory: Path,
    recursive: bool | None,
    select: bool | None,
    isolation: str,
    toc: bool,
    assume_yes: bool,
) -> None:
    """Extract ComicInfo metadata from comics in DIRECTORY into their sidecar settings."""
    console = Console()
    root = directory.resolve()
    ui = ConsoleInteraction(console=console, assume_yes=assume_yes)

    if recursive is None:
        recursive = False
        if has_subdirectories(root):
            recursive = ui.confirm(SUBFOLDERS_MESSAGE, "Here only", "Here and under")

    if select is None:
        select = not ui.confirm(SELECTION_MESSAGE, "Select files", "Full directory")

    context = BatchContext(
        root=root,
        ui=ui,
        isolation=make_isolation(isolation),
        toc=toc,
    )

    if select:
        outcome = _run_selection(root, recursive, context, ui)
    else:
        with cancel_on_interrupt(context.cancel) as arm:
            ui.on_progress = arm
            outcome = process_directory(root, recursive, context)

    ui.finish()

    if outcome is None and context.cancel.cancelled:
        console.print("[yellow]Extraction aborted.[/yellow]")
