# ABOUTME: Builds a handmade table of contents from ComicInfo page bookmarks.
# ABOUTME: Converts 0-based image indices to 1-based pages and writes the ToC settings.

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from comicmeta.metadata.types import ComicPage, TocEntry

if TYPE_CHECKING:
    from comicmeta.settings.docsettings import DocSettings

logger = logging.getLogger(__name__)


def build_toc(pages: Sequence[ComicPage] | None) -> list[TocEntry]:
    """Turn bookmarked pages into ToC entries, in page-list order.

    Given ComicInfo.xml pages such as:

        <Page Image="0" Type="FrontCover" Bookmark="Cover" />
        <Page Image="1" Type="Story" />
        <Page Image="71" Type="Story" Bookmark="Chapter 2" />

    this yields Cover -> page 1 and Chapter 2 -> page 72. Pages without a
    bookmark are skipped. A page whose Image is not a run of digits
    (surrounding whitespace allowed) is logged and skipped without affecting
    the others.
    """
    if not pages:
        logger.debug("No pages data found")
        return []

    toc: list[TocEntry] = []
    for page in pages:
        if not page.bookmark:
            continue
        image = (page.image or "").strip()
        # Plain ASCII digits only: no sign, no underscores.
        if not (image.isascii() and image.isdigit()):
            logger.error("Invalid Image value for page %r (bookmark %r)", page.image, page.bookmark)
            continue
        toc.append(TocEntry(depth=1, page=int(image) + 1, title=page.bookmark))

    if not toc:
        logger.debug("No bookmarked pages found")
    return toc


def write_toc(doc_settings: DocSettings, pages: Sequence[ComicPage] | None) -> bool:
    """Stage a handmade ToC in a document's reader settings.

    The ToC and its two flags are saved together so one flush persists all
    three. Nothing is saved when no entry survives filtering.

    Returns:
        True if a ToC was staged and the settings need flushing.
    """
    toc = build_toc(pages)
    if not toc:
        return False

    logger.debug("Created ToC with %d entries", len(toc))
    doc_settings.save_setting("handmade_toc", [entry.to_dict() for entry in toc])
    doc_settings.save_setting("handmade_toc_enabled", True)
    doc_settings.save_setting("handmade_toc_edit_enabled", False)
    return True
