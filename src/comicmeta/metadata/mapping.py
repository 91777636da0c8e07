# ABOUTME: Translation of ComicInfo source fields into reader document properties.
# ABOUTME: Decodes HTML entities and turns comma-separated tags into newline-separated keywords.

import html

from comicmeta.metadata.types import ComicInfo

# ComicInfo.xml element name -> document property key.
FIELD_MAP: dict[str, str] = {
    "Title": "title",
    "Writer": "authors",
    "Series": "series",
    "Number": "series_index",
    "Summary": "description",
    "Tags": "keywords",
    "LanguageISO": "language",
}

TARGET_KEYS: frozenset[str] = frozenset(FIELD_MAP.values())


def decode_entities(text: str) -> str:
    """Replace HTML entity escapes (&amp;, &#233;, &eacute;, ...) with their characters."""
    return html.unescape(text)


def normalize_keywords(raw: str) -> str:
    """Turn a comma-delimited tag string into one keyword per line.

    Tokens are trimmed and empty tokens dropped before entity decoding:
    "Action, Sci-Fi ,  Drama" -> "Action\\nSci-Fi\\nDrama".
    """
    tokens = (token.strip() for token in raw.split(","))
    return "\n".join(decode_entities(token) for token in tokens if token)


def map_comic_info(info: ComicInfo) -> dict[str, str]:
    """Build the normalized document property mapping for a parsed comic.

    Only fields present in the ComicInfo are returned, so a property the
    archive says nothing about is never overwritten.
    """
    props: dict[str, str] = {}
    for source_name, target_key in FIELD_MAP.items():
        value = info.get(source_name)
        if value is None:
            continue
        if target_key == "keywords":
            props[target_key] = normalize_keywords(value)
        else:
            props[target_key] = decode_entities(value)
    return props
