# ABOUTME: Ordering and selection state for choosing which scanned comics to process.
# ABOUTME: Top-level files first, then subfolder files, each group sorted by filename.

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

CHECK_MARK = "✓ "


def sort_scan_result(paths: Iterable[Path], root: Path) -> list[Path]:
    """Sort scanned paths into the two display groups.

    Files directly in `root` come before files in subdirectories regardless
    of how their full paths compare; within a group the order is by
    filename, case-insensitively.
    """

    def key(path: Path) -> tuple[int, str, str]:
        in_root = path.parent == root
        return (0 if in_root else 1, path.name.lower(), str(path))

    return sorted(paths, key=key)


@dataclass
class SelectionItem:
    """One selectable comic in the file picker."""

    path: Path
    label: str
    selected: bool = False

    @property
    def text(self) -> str:
        """Display text, with a check mark when selected."""
        return f"{CHECK_MARK}{self.label}" if self.selected else self.label

    def toggle(self) -> None:
        self.selected = not self.selected


def display_label(path: Path, root: Path, recursive: bool) -> str:
    """Bare filename for flat scans, root-relative path for recursive ones."""
    if recursive:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            return str(path)
    return path.name


def build_selection(paths: Iterable[Path], root: Path, recursive: bool) -> list[SelectionItem]:
    """Build unselected picker items in display order."""
    return [
        SelectionItem(path=path, label=display_label(path, root, recursive))
        for path in sort_scan_result(paths, root)
    ]


def selected_paths(items: Iterable[SelectionItem]) -> list[Path]:
    """Return the chosen paths, keeping display order."""
    return [item.path for item in items if item.selected]
