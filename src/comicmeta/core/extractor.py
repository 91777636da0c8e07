# ABOUTME: Single-file pipeline: read ComicInfo, merge it into custom metadata, write the ToC.
# ABOUTME: Keeps a first-write-wins snapshot of the original values so they can be restored.

import logging
from dataclasses import dataclass
from pathlib import Path

from comicmeta.core.toc import write_toc
from comicmeta.formats.comicinfo import ComicInfoReadError, read_comic_info
from comicmeta.metadata.mapping import TARGET_KEYS, map_comic_info
from comicmeta.settings.docsettings import DocSettings, SettingsError

logger = logging.getLogger(__name__)

# Keys in the custom metadata file.
ORIGINAL_PROPS_KEY = "doc_props"
CUSTOM_PROPS_KEY = "custom_props"


def merge_properties(custom_settings: DocSettings, props: dict[str, str]) -> None:
    """Overwrite live custom properties, snapshotting prior values first.

    For every key about to be written, the current custom value (or "" if
    there is none) is copied to the original snapshot unless the snapshot
    already holds that key. Later runs therefore never touch the snapshot.
    """
    current = dict(custom_settings.read_setting(CUSTOM_PROPS_KEY) or {})
    original = dict(custom_settings.read_setting(ORIGINAL_PROPS_KEY) or {})

    for key in props:
        if key not in original:
            original[key] = current.get(key, "")

    current.update(props)

    custom_settings.save_setting(ORIGINAL_PROPS_KEY, original)
    custom_settings.save_setting(CUSTOM_PROPS_KEY, current)


def extract_and_merge(path: Path, *, toc: bool = True) -> bool:
    """Extract ComicInfo metadata from one comic and merge it into its settings.

    Args:
        path: Path to the comic archive.
        toc: Whether to write a handmade ToC from page bookmarks.

    Returns:
        True on success, False if the comic or its settings could not be read
        or written. Unexpected errors propagate to the caller's isolation
        boundary.
    """
    try:
        info = read_comic_info(path)
    except ComicInfoReadError as exc:
        logger.warning("Failed to open comic file %s: %s", path, exc)
        return False

    if info is None:
        logger.info("Skipping %s: no ComicInfo.xml", path)
        return False

    props = map_comic_info(info)
    logger.debug("Mapped metadata for %s: %s", path, props)

    try:
        custom_settings = DocSettings.open_settings_file(path)
        doc_settings = DocSettings.open(path)
    except SettingsError as exc:
        logger.warning("Failed to open settings for %s: %s", path, exc)
        return False

    merge_properties(custom_settings, props)
    has_toc = toc and write_toc(doc_settings, info.pages)

    # ToC first: if it fails, the custom properties on disk are unchanged.
    try:
        if has_toc:
            doc_settings.flush()
        custom_settings.flush_custom_metadata(path)
    except SettingsError as exc:
        logger.warning("Failed to save settings for %s: %s", path, exc)
        return False

    return True


@dataclass
class RestoreResult:
    """Outcome of restoring one document's original properties."""

    path: Path
    restored: bool
    keys: list[str]
    error: str | None = None


def restore_original(path: Path) -> RestoreResult:
    """Put the snapshotted original properties back and clear the snapshot.

    Keys whose original value was empty are removed from the custom
    properties, so the reader falls back to the document's own metadata.
    A document without a snapshot is left untouched.
    """
    try:
        custom_settings = DocSettings.open_settings_file(path)
    except SettingsError as exc:
        return RestoreResult(path=path, restored=False, keys=[], error=str(exc))

    original = custom_settings.read_setting(ORIGINAL_PROPS_KEY)
    if not original:
        return RestoreResult(path=path, restored=False, keys=[])

    current = dict(custom_settings.read_setting(CUSTOM_PROPS_KEY) or {})
    restored_keys = sorted(key for key in original if key in TARGET_KEYS)
    for key in restored_keys:
        value = original[key]
        if value:
            current[key] = value
        else:
            current.pop(key, None)

    custom_settings.save_setting(CUSTOM_PROPS_KEY, current)
    custom_settings.delete_setting(ORIGINAL_PROPS_KEY)

    try:
        custom_settings.flush_custom_metadata(path)
    except SettingsError as exc:
        return RestoreResult(path=path, restored=False, keys=[], error=str(exc))

    return RestoreResult(path=path, restored=True, keys=restored_keys)
