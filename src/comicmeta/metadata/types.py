# ABOUTME: Core data structures for comic metadata and the derived table of contents.
# ABOUTME: ComicInfo is the parser output; TocEntry is one row of a handmade ToC.

from dataclasses import dataclass, field
from pathlib import Path

# Raw ComicInfo.xml element names we read, in the order they are displayed.
SOURCE_FIELDS: tuple[str, ...] = (
    "Title",
    "Writer",
    "Series",
    "Number",
    "Summary",
    "Tags",
    "LanguageISO",
)


@dataclass(frozen=True)
class ComicPage:
    """A single <Page> entry from ComicInfo.xml.

    `image` is kept as the raw attribute string; it is only converted to an
    integer when a ToC is built, so a malformed value affects one entry.
    """

    image: str
    bookmark: str = ""


@dataclass(frozen=True)
class ComicInfo:
    """Metadata parsed from a comic archive's ComicInfo.xml.

    Fields use the source schema names (Title, Writer, ...). A field that was
    missing from the XML is absent from `fields` rather than mapped to "".
    """

    fields: dict[str, str] = field(default_factory=dict)
    pages: tuple[ComicPage, ...] = ()
    source_path: Path | None = None

    def get(self, name: str) -> str | None:
        """Return a raw source field, or None if the XML did not contain it."""
        return self.fields.get(name)


@dataclass(frozen=True)
class TocEntry:
    """One handmade ToC row: 1-based page number and its bookmark title."""

    depth: int
    page: int
    title: str

    def to_dict(self) -> dict[str, int | str]:
        return {"depth": self.depth, "page": self.page, "title": self.title}
