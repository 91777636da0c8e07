# ABOUTME: Settings package: per-document sidecar storage for reader state and custom metadata.
# ABOUTME: Exports DocSettings and its error types.

from comicmeta.settings.docsettings import (
    SIDECAR_SUFFIX,
    DocSettings,
    SettingsError,
    SettingsOpenError,
    SettingsWriteError,
    sidecar_dir,
)

__all__ = [
    "SIDECAR_SUFFIX",
    "DocSettings",
    "SettingsError",
    "SettingsOpenError",
    "SettingsWriteError",
    "sidecar_dir",
]
