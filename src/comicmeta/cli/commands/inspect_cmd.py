# ABOUTME: The `comicmeta inspect` command for viewing a comic's ComicInfo metadata.
# ABOUTME: Shows the mapped document properties and the ToC that extraction would write.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from comicmeta.core.toc import build_toc
from comicmeta.formats.comicinfo import ComicInfoReadError, read_comic_info
from comicmeta.metadata.mapping import FIELD_MAP, map_comic_info

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(path: Path) -> None:
    """Show metadata extracted from a CBZ/CBR file."""
    try:
        info = read_comic_info(path)
    except ComicInfoReadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if info is None:
        console.print(f"[yellow]No ComicInfo.xml in {path.name}[/yellow]")
        raise SystemExit(1)

    props = map_comic_info(info)

    table = Table(title=str(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    for source_name, key in FIELD_MAP.items():
        value = props.get(key)
        table.add_row(f"{key} ({source_name})", escape(value) if value else "[dim]none[/dim]")

    console.print(table)

    toc = build_toc(info.pages)
    if not toc:
        console.print("[dim]No bookmarked pages.[/dim]")
        return

    toc_table = Table(title="Table of Contents")
    toc_table.add_column("Page", justify="right")
    toc_table.add_column("Title")
    for entry in toc:
        toc_table.add_row(str(entry.page), escape(entry.title))
    console.print(toc_table)
