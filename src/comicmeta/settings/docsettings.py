# ABOUTME: Per-document settings store kept in a `.sdr` sidecar directory next to each comic.
# ABOUTME: JSON-backed key/value files with atomic flush; nothing reaches disk before flush().

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".sdr"
CUSTOM_METADATA_PREFIX = "custom_metadata"


class SettingsError(Exception):
    """Base class for settings store failures."""


class SettingsOpenError(SettingsError):
    """Raised when a document's settings file exists but cannot be loaded."""


class SettingsWriteError(SettingsError):
    """Raised when a settings file cannot be written back to disk."""


def sidecar_dir(doc_path: Path) -> Path:
    """Return the sidecar directory for a document: /a/b/book.cbz -> /a/b/book.sdr."""
    return doc_path.parent / f"{doc_path.stem}{SIDECAR_SUFFIX}"


def document_settings_path(doc_path: Path) -> Path:
    """Return the reader settings file: book.sdr/metadata.cbz.json."""
    return sidecar_dir(doc_path) / f"metadata{doc_path.suffix.lower()}.json"


def custom_metadata_path(doc_path: Path) -> Path:
    """Return the custom metadata file: book.sdr/custom_metadata.cbz.json.

    The extension is part of the name so that book.cbz and book.cbr, which
    share a sidecar directory, keep separate properties.
    """
    return sidecar_dir(doc_path) / f"{CUSTOM_METADATA_PREFIX}{doc_path.suffix.lower()}.json"


def _load(settings_file: Path) -> dict[str, Any]:
    """Read a settings file, returning an empty mapping if it does not exist yet."""
    sidecar = settings_file.parent
    if sidecar.exists() and not sidecar.is_dir():
        raise SettingsOpenError(f"Sidecar path is not a directory: {sidecar}")
    if not settings_file.exists():
        return {}

    try:
        data = json.loads(settings_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SettingsOpenError(f"Failed to read settings: {settings_file}: {exc}") from exc

    if not isinstance(data, dict):
        raise SettingsOpenError(f"Settings file is not a JSON object: {settings_file}")
    return data


class DocSettings:
    """Key/value settings for one document, backed by one JSON file.

    Two files exist per document: the reader settings (`open`) that hold
    things like the handmade ToC, and the custom metadata
    (`open_settings_file`) that holds the `doc_props` snapshot and the
    live `custom_props`. Changes stay in memory until flushed.
    """

    def __init__(self, doc_path: Path, settings_file: Path, data: dict[str, Any]) -> None:
        self.doc_path = doc_path
        self.settings_file = settings_file
        self._data = data

    @classmethod
    def open(cls, doc_path: Path) -> "DocSettings":
        """Open the reader settings for a document.

        Raises:
            SettingsOpenError: If an existing settings file is unreadable.
        """
        settings_file = document_settings_path(doc_path)
        return cls(doc_path, settings_file, _load(settings_file))

    @classmethod
    def open_settings_file(cls, doc_path: Path) -> "DocSettings":
        """Open the custom metadata file for a document.

        Raises:
            SettingsOpenError: If an existing custom metadata file is unreadable.
        """
        settings_file = custom_metadata_path(doc_path)
        return cls(doc_path, settings_file, _load(settings_file))

    def read_setting(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has_setting(self, key: str) -> bool:
        return key in self._data

    def save_setting(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete_setting(self, key: str) -> None:
        self._data.pop(key, None)

    def flush(self) -> None:
        """Write the settings atomically: temp file in the sidecar, then rename.

        Raises:
            SettingsWriteError: If the sidecar directory or file cannot be written.
        """
        directory = self.settings_file.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.settings_file.name}.", dir=directory
            )
        except OSError as exc:
            raise SettingsWriteError(f"Failed to write settings: {self.settings_file}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._data, handle, indent=2, ensure_ascii=False, sort_keys=True)
            os.replace(tmp_name, self.settings_file)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise SettingsWriteError(f"Failed to write settings: {self.settings_file}: {exc}") from exc

        logger.debug("Flushed %s", self.settings_file)

    def flush_custom_metadata(self, doc_path: Path) -> None:
        """Flush custom metadata, recording which document it belongs to."""
        self.save_setting("doc_path", str(doc_path))
        self.flush()
