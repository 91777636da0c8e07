# ABOUTME: Unit tests for the sidecar settings store.
# ABOUTME: Covers sidecar paths, load/save/flush, atomic writes, and open failures.

import json
from pathlib import Path

import pytest

from comicmeta.settings.docsettings import (
    DocSettings,
    SettingsOpenError,
    SettingsWriteError,
    custom_metadata_path,
    document_settings_path,
    sidecar_dir,
)


class TestSidecarPaths:
    def test_sidecar_dir_uses_stem(self) -> None:
        assert sidecar_dir(Path("/comics/Vol 1.cbz")) == Path("/comics/Vol 1.sdr")

    def test_document_settings_file_keeps_extension(self) -> None:
        assert document_settings_path(Path("/c/a.CBR")) == Path("/c/a.sdr/metadata.cbr.json")

    def test_custom_metadata_file(self) -> None:
        assert custom_metadata_path(Path("/c/a.cbz")) == Path("/c/a.sdr/custom_metadata.cbz.json")

    def test_same_stem_documents_get_separate_custom_metadata(self) -> None:
        cbz = custom_metadata_path(Path("/c/a.CBZ"))
        cbr = custom_metadata_path(Path("/c/a.cbr"))
        assert cbz.parent == cbr.parent
        assert cbz != cbr


class TestDocSettings:
    def test_new_document_has_no_settings(self, tmp_path: Path) -> None:
        settings = DocSettings.open(tmp_path / "a.cbz")
        assert settings.read_setting("anything") is None
        assert settings.read_setting("anything", "default") == "default"

    def test_nothing_written_before_flush(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.cbz"
        settings = DocSettings.open_settings_file(doc)
        settings.save_setting("custom_props", {"title": "T"})
        assert not sidecar_dir(doc).exists()

    def test_flush_round_trip(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.cbz"
        settings = DocSettings.open(doc)
        settings.save_setting("handmade_toc_enabled", True)
        settings.flush()

        reopened = DocSettings.open(doc)
        assert reopened.read_setting("handmade_toc_enabled") is True

    def test_flush_leaves_no_temp_files(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.cbz"
        settings = DocSettings.open(doc)
        settings.save_setting("k", "v")
        settings.flush()
        assert [p.name for p in sidecar_dir(doc).iterdir()] == ["metadata.cbz.json"]

    def test_flush_custom_metadata_records_document(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.cbz"
        settings = DocSettings.open_settings_file(doc)
        settings.flush_custom_metadata(doc)

        data = json.loads(custom_metadata_path(doc).read_text())
        assert data["doc_path"] == str(doc)

    def test_delete_setting(self, tmp_path: Path) -> None:
        settings = DocSettings.open(tmp_path / "a.cbz")
        settings.save_setting("k", "v")
        settings.delete_setting("k")
        settings.delete_setting("missing")
        assert not settings.has_setting("k")

    def test_corrupt_json_raises(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.cbz"
        sidecar_dir(doc).mkdir()
        custom_metadata_path(doc).write_text("{not json")
        with pytest.raises(SettingsOpenError):
            DocSettings.open_settings_file(doc)

    def test_non_object_json_raises(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.cbz"
        sidecar_dir(doc).mkdir()
        document_settings_path(doc).write_text("[1, 2]")
        with pytest.raises(SettingsOpenError):
            DocSettings.open(doc)

    def test_sidecar_path_is_a_file(self, tmp_path: Path) -> None:
        doc = tmp_path / "a.cbz"
        sidecar_dir(doc).write_text("in the way")
        with pytest.raises(SettingsOpenError, match="not a directory"):
            DocSettings.open(doc)

    def test_flush_into_missing_parent_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not dir")
        settings = DocSettings.open(blocker / "a.cbz")
        settings.save_setting("k", "v")
        with pytest.raises(SettingsWriteError):
            settings.flush()
