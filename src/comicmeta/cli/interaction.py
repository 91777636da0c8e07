# ABOUTME: Terminal implementation of the batch runner's Interaction protocol.
# ABOUTME: Two-choice prompts via click, notices and a progress bar via Rich.

from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
)


def _make_progress(console: Console) -> Progress:
    """Create a Rich progress bar for batch processing."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    )


class ConsoleInteraction:
    """Prompts and progress for a batch run in the terminal.

    With `assume_yes`, every two-choice prompt is answered with its second
    (affirmative) choice without asking.
    """

    def __init__(self, *, console: Console | None = None, assume_yes: bool = False) -> None:
        self._console = console or Console()
        self._assume_yes = assume_yes
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._total = 0
        self.on_progress: Callable[[], None] | None = None

    @property
    def console(self) -> Console:
        return self._console

    def confirm(self, message: str, cancel_label: str, ok_label: str) -> bool:
        """Show a message and ask to pick between two labeled choices.

        Returns True for `ok_label`, False for `cancel_label`.
        """
        if self._assume_yes:
            return True

        self.finish()
        self._console.print(message)
        choice = click.prompt(
            f"[1] {cancel_label}  [2] {ok_label}",
            type=click.Choice(["1", "2"]),
            default="2",
            show_choices=False,
        )
        return choice == "2"

    def info(self, message: str) -> None:
        """Print a notice.

        A notice while the bar is showing is the batch summary, so the bar is
        filled before it stops.
        """
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, completed=self._total)
        self.finish()
        self._console.print(message)

    def progress(self, index: int, total: int, path: Path) -> None:
        """Show `index / total` for the file about to be processed."""
        if self.on_progress is not None:
            self.on_progress()
        self._total = total
        if self._progress is None:
            self._progress = _make_progress(self._console)
            self._task_id = self._progress.add_task("Extracting metadata", total=total)
            self._progress.start()
        assert self._task_id is not None
        self._progress.update(self._task_id, completed=index - 1, description=escape(path.name))

    def finish(self) -> None:
        """Stop the progress bar, if one is showing."""
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task_id = None
