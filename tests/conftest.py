# ABOUTME: Shared pytest fixtures for comicmeta tests.
# ABOUTME: Builds CBZ archives with ComicInfo.xml (valid, missing, corrupt) and folder trees.

import zipfile
from pathlib import Path

import pytest

SAMPLE_COMICINFO = """<?xml version="1.0" encoding="utf-8"?>
<ComicInfo xmlns:xsd="http://www.w3.org/2001/XMLSchema"
           xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <Title>Paradise &amp;amp; Beyond</Title>
  <Series>Parasyte</Series>
  <Number>1</Number>
  <Summary>Alien spores &amp;quot;land&amp;quot; on Earth.</Summary>
  <Writer>Hitoshi Iwaaki</Writer>
  <Tags>Action, Sci-Fi ,  Drama,</Tags>
  <LanguageISO>pt</LanguageISO>
  <Pages>
    <Page Image="0" Type="FrontCover" Bookmark="Cover" />
    <Page Image="1" Type="Story" Bookmark="Chapter 1: Paradise" />
    <Page Image="2" Type="Story" />
    <Page Image="71" Type="Story" Bookmark="Chapter 2: Pseudo-creatures" />
  </Pages>
</ComicInfo>
"""


def make_cbz(path: Path, comicinfo: str | None = SAMPLE_COMICINFO) -> Path:
    """Write a small CBZ with two page images and an optional ComicInfo.xml."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("001.jpg", b"fake jpg 1")
        archive.writestr("002.jpg", b"fake jpg 2")
        if comicinfo is not None:
            archive.writestr("ComicInfo.xml", comicinfo)
    return path


def comicinfo_xml(title: str, pages: str = "") -> str:
    """Minimal ComicInfo.xml with a title and optional <Page> elements."""
    pages_block = f"<Pages>{pages}</Pages>" if pages else ""
    return f"<ComicInfo><Title>{title}</Title>{pages_block}</ComicInfo>"


@pytest.fixture
def sample_cbz(tmp_path: Path) -> Path:
    """A CBZ with full ComicInfo metadata and bookmarked pages."""
    return make_cbz(tmp_path / "parasyte_v01.cbz")


@pytest.fixture
def no_comicinfo_cbz(tmp_path: Path) -> Path:
    """A CBZ that carries only images."""
    return make_cbz(tmp_path / "plain.cbz", comicinfo=None)


@pytest.fixture
def corrupt_cbz(tmp_path: Path) -> Path:
    """A file named like a comic that is not an archive."""
    filepath = tmp_path / "corrupt.cbz"
    filepath.write_text("this is not a valid comic archive")
    return filepath


@pytest.fixture
def comic_tree(tmp_path: Path) -> Path:
    """Create a library folder with comics at several depths.

    Layout:
        library/
            b.cbz
            A.CBR            (zip content, rar extension)
            notes.txt
            a.cbz.bak
            b.sdr/           (sidecar, holds a decoy comic)
                decoy.cbz
            Series/
                c.cbz
                Deeper/
                    d.cbz
                Extra.SDR/
                    decoy2.cbz
    """
    root = tmp_path / "library"
    make_cbz(root / "b.cbz", comicinfo_xml("B"))
    make_cbz(root / "A.CBR", comicinfo_xml("A"))
    (root / "notes.txt").write_text("not a comic")
    (root / "a.cbz.bak").write_bytes(b"backup")
    make_cbz(root / "b.sdr" / "decoy.cbz", comicinfo_xml("Decoy"))
    make_cbz(root / "Series" / "c.cbz", comicinfo_xml("C"))
    make_cbz(root / "Series" / "Deeper" / "d.cbz", comicinfo_xml("D"))
    make_cbz(root / "Series" / "Extra.SDR" / "decoy2.cbz", comicinfo_xml("Decoy 2"))
    return root
