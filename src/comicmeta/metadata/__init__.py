# ABOUTME: Metadata package for comic metadata representation and field mapping.
# ABOUTME: Exports ComicInfo, TocEntry, and the ComicInfo -> document property translation.

from comicmeta.metadata.mapping import (
    FIELD_MAP,
    TARGET_KEYS,
    decode_entities,
    map_comic_info,
    normalize_keywords,
)
from comicmeta.metadata.types import ComicInfo, ComicPage, TocEntry

__all__ = [
    "FIELD_MAP",
    "TARGET_KEYS",
    "ComicInfo",
    "ComicPage",
    "TocEntry",
    "decode_entities",
    "map_comic_info",
    "normalize_keywords",
]
