# ABOUTME: The `comicmeta restore` command for undoing extracted metadata.
# ABOUTME: Puts the original property snapshot back into each document's custom metadata.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from comicmeta.core.extractor import restore_original
from comicmeta.core.scanner import scan_for_comics
from comicmeta.core.selector import sort_scan_result


def _collect(paths: tuple[Path, ...], recursive: bool) -> list[Path]:
    """Expand directory arguments into the comics they contain."""
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            root = path.resolve()
            files.extend(sort_scan_result(scan_for_comics(root, recursive), root))
        else:
            files.append(path.resolve())
    return files


@click.command("restore")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "-r", "--recursive",
    is_flag=True,
    default=False,
    help="Descend into subfolders of directory arguments.",
)
def restore(paths: tuple[Path, ...], recursive: bool) -> None:
    """Restore the original metadata of comics changed by `extract`."""
    console = Console()
    files = _collect(paths, recursive)

    if not files:
        console.print("[yellow]No comic files (.cbr/.cbz) found[/yellow]")
        return

    restored = 0
    skipped = 0
    errors = 0

    for path in files:
        result = restore_original(path)
        if result.error is not None:
            console.print(f"  [red]Error:[/red] {escape(path.name)}: {escape(result.error)}")
            errors += 1
        elif result.restored:
            console.print(f"  [green]Restored:[/green] {escape(path.name)} ({', '.join(result.keys)})")
            restored += 1
        else:
            skipped += 1

    parts = [f"[green]{restored} restored[/green]"]
    if skipped:
        parts.append(f"[yellow]{skipped} without snapshot[/yellow]")
    if errors:
        parts.append(f"[red]{errors} error{'s' if errors != 1 else ''}[/red]")

    console.print(f"\nDone: {', '.join(parts)}")

    if errors:
        raise SystemExit(1)
