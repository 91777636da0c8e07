# ABOUTME: Directory scanner that finds comic archives (.cbz/.cbr) under a folder.
# ABOUTME: Skips `.sdr` sidecar directories, special files, and unreadable subtrees.

from __future__ import annotations

import logging
from pathlib import Path

from comicmeta.settings.docsettings import SIDECAR_SUFFIX

logger = logging.getLogger(__name__)

COMIC_EXTENSIONS: frozenset[str] = frozenset({".cbz", ".cbr"})


def is_comic_file(name: str) -> bool:
    """Check a filename against the comic extensions, case-insensitively."""
    lowered = name.lower()
    return any(lowered.endswith(ext) for ext in COMIC_EXTENSIONS)


def is_sidecar_dir(name: str) -> bool:
    """Sidecar directories hold per-document reader state, never comics."""
    return name.lower().endswith(SIDECAR_SUFFIX)


def _list_entries(folder: Path) -> list[Path]:
    """List a directory's immediate entries, or [] if it cannot be read."""
    try:
        return list(folder.iterdir())
    except OSError as exc:
        logger.debug("Cannot list %s: %s", folder, exc)
        return []


def scan_for_comics(folder: Path, recursive: bool) -> list[Path]:
    """Collect comic archive paths in a folder, optionally descending into subfolders.

    Entries that are neither regular files nor directories (sockets, dangling
    symlinks, ...) are ignored. Symlinked directories are followed once.

    Args:
        folder: The folder to scan.
        recursive: Whether to scan subdirectories too.

    Returns:
        Comic file paths in traversal order. Sorting is left to the caller.
    """
    return _scan(folder, recursive, visited=set())


def _scan(folder: Path, recursive: bool, visited: set[Path]) -> list[Path]:
    logger.debug("Scanning %s (recursive=%s)", folder, recursive)

    try:
        visited.add(folder.resolve())
    except OSError:
        pass

    comic_files: list[Path] = []

    for entry in _list_entries(folder):
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError:
            continue

        if is_dir:
            if not recursive or is_sidecar_dir(entry.name):
                continue
            try:
                real = entry.resolve()
            except OSError:
                continue
            if real in visited:
                logger.debug("Skipping already visited directory %s", entry)
                continue
            comic_files.extend(_scan(entry, recursive, visited))
        elif is_file and is_comic_file(entry.name):
            logger.debug("Found comic file %s", entry)
            comic_files.append(entry)

    if not comic_files:
        logger.debug("No comic files found in %s", folder)

    return comic_files


def has_subdirectories(folder: Path) -> bool:
    """Check whether a folder has at least one immediate non-sidecar subdirectory."""
    for entry in _list_entries(folder):
        try:
            if entry.is_dir() and not is_sidecar_dir(entry.name):
                logger.debug("Found subdirectory %s", entry)
                return True
        except OSError:
            continue
    return False
