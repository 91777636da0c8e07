# ABOUTME: Interactive file picker for choosing which scanned comics to process.
# ABOUTME: Shows a numbered Rich table and toggles entries from click prompts.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from comicmeta.core.selector import SelectionItem, selected_paths


def parse_indices(choice: str, count: int) -> list[int] | None:
    """Parse '3', '1,4' or '2-5' into 0-based indices.

    Returns None when any part is malformed or out of range.
    """
    indices: list[int] = []
    for part in choice.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_str, end_str = part.split("-", 1)
                start, end = int(start_str), int(end_str)
            else:
                start = end = int(part)
        except ValueError:
            return None
        if start < 1 or end > count or start > end:
            return None
        indices.extend(range(start - 1, end))
    return indices


class SelectionSession:
    """Checklist of scanned comics.

    The user toggles entries by number or range, then commits with 'd'.
    Committing with nothing selected returns an empty list; quitting
    returns None.
    """

    def __init__(self, items: list[SelectionItem], *, console: Console | None = None) -> None:
        self._items = items
        self._console = console or Console()

    def _show(self) -> None:
        table = Table(title="Select files")
        table.add_column("#", style="bold", width=4)
        table.add_column("File")

        for i, item in enumerate(self._items, start=1):
            style = "green" if item.selected else None
            table.add_row(str(i), escape(item.text), style=style)

        self._console.print(table)

    def run(self) -> list[Path] | None:
        """Prompt until the user commits or quits.

        Returns:
            Selected paths in display order, or None if the user quit.
        """
        count = len(self._items)
        while True:
            self._show()
            choice = click.prompt(
                "[1-N, 1,3, 2-5] Toggle  [a] All  [n] None  [d] Done  [q] Quit",
                type=str,
                default="d",
            ).strip().lower()

            if choice == "q":
                return None
            if choice == "d":
                return selected_paths(self._items)
            if choice == "a":
                for item in self._items:
                    item.selected = True
                continue
            if choice == "n":
                for item in self._items:
                    item.selected = False
                continue

            indices = parse_indices(choice, count)
            if indices is None:
                self._console.print(f"[red]Invalid choice:[/red] {escape(choice)}")
                continue
            for idx in indices:
                self._items[idx].toggle()
