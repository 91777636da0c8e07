# ABOUTME: ComicInfo.xml extraction from CBZ (zip) and CBR (rar) comic archives.
# ABOUTME: Defensive wrapper that turns archive and XML errors into ComicInfoReadError.

import logging
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path

import rarfile

from comicmeta.metadata.types import SOURCE_FIELDS, ComicInfo, ComicPage

logger = logging.getLogger(__name__)

COMICINFO_NAME = "comicinfo.xml"


class ComicInfoReadError(Exception):
    """Raised when a comic archive or its ComicInfo.xml cannot be read or parsed."""


def _local_name(tag: str) -> str:
    """Strip an XML namespace prefix like '{http://...}Title' -> 'Title'."""
    return tag.rsplit("}", 1)[-1]


def _find_comicinfo_member(names: list[str]) -> str | None:
    """Pick the ComicInfo.xml member, preferring one at the archive root."""
    matches = [n for n in names if n.replace("\\", "/").rsplit("/", 1)[-1].lower() == COMICINFO_NAME]
    if not matches:
        return None
    return min(matches, key=lambda n: n.count("/"))


def _read_member(path: Path) -> bytes | None:
    """Return the raw ComicInfo.xml bytes from an archive, or None if it has none.

    The container type is detected from the file content, not the extension,
    since .cbr files are frequently zip archives in disguise.
    """
    if zipfile.is_zipfile(path):
        with zipfile.ZipFile(path) as archive:
            member = _find_comicinfo_member(archive.namelist())
            return archive.read(member) if member else None

    if rarfile.is_rarfile(path):
        with rarfile.RarFile(path) as archive:
            member = _find_comicinfo_member(archive.namelist())
            return archive.read(member) if member else None

    raise ComicInfoReadError(f"Not a zip or rar archive: {path}")


def parse_comicinfo_xml(data: bytes, source_path: Path | None = None) -> ComicInfo:
    """Parse ComicInfo.xml content into a ComicInfo record.

    Raises:
        ComicInfoReadError: If the XML is malformed.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ComicInfoReadError(f"Malformed ComicInfo.xml: {source_path}: {exc}") from exc

    fields: dict[str, str] = {}
    pages: list[ComicPage] = []

    for child in root:
        name = _local_name(child.tag)
        if name in SOURCE_FIELDS:
            fields[name] = (child.text or "").strip()
        elif name == "Pages":
            for page in child:
                if _local_name(page.tag) != "Page":
                    continue
                pages.append(
                    ComicPage(
                        image=page.get("Image", ""),
                        bookmark=page.get("Bookmark", ""),
                    )
                )

    return ComicInfo(fields=fields, pages=tuple(pages), source_path=source_path)


def read_comic_info(path: Path) -> ComicInfo | None:
    """Extract ComicInfo metadata from a CBZ or CBR archive.

    Args:
        path: Path to the comic archive.

    Returns:
        The parsed ComicInfo, or None if the archive carries no ComicInfo.xml.

    Raises:
        ComicInfoReadError: If the archive cannot be opened or the XML is malformed.
    """
    if not path.exists():
        raise ComicInfoReadError(f"File not found: {path}")

    try:
        data = _read_member(path)
    except (OSError, zipfile.BadZipFile, rarfile.Error) as exc:
        raise ComicInfoReadError(f"Failed to read archive: {path}: {exc}") from exc

    if data is None:
        logger.debug("No ComicInfo.xml in %s", path)
        return None

    return parse_comicinfo_xml(data, source_path=path)
