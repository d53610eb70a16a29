# src/chronicle/models/link.py
"""Link data model and the tag vocabulary used by the index."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from chronicle.timestamps import TAG_WIDTH, format_timestamp, parse_tag_timestamp

# parent node -> child node, suffixed with the child's coordinate
CHILD_TAG = "child:"
# leaf node -> entry, suffixed with the entry's creation timestamp and an
# optional caller link tag: "entry:<timestamp>" or "entry:<timestamp>:<link tag>"
ENTRY_TAG = "entry:"
# registry anchor / index root -> chunk, suffixed with the chunk start seconds
CHUNK_TAG = "chunk:"
# entry -> leaf node, suffixed with the index name
INDEXED_IN_TAG = "indexed_in:"


class Link(BaseModel):
    """A directed, tagged relationship between two addresses."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    tag: str

    @property
    def created(self) -> datetime | None:
        """Creation time carried by an index link tag, None for other links."""
        if not self.tag.startswith(ENTRY_TAG):
            return None
        return parse_tag_timestamp(self.tag[len(ENTRY_TAG) : len(ENTRY_TAG) + TAG_WIDTH])

    @property
    def link_tag(self) -> str | None:
        """Caller-supplied tag of an index link, None if it has none."""
        if not self.tag.startswith(ENTRY_TAG):
            return None
        rest = self.tag[len(ENTRY_TAG) + TAG_WIDTH :]
        return rest[1:] if rest.startswith(":") else None

    @property
    def suffix(self) -> str:
        """The part of the tag after its ``kind:`` prefix."""
        _, _, rest = self.tag.partition(":")
        return rest


def entry_tag(created: datetime, link_tag: str | None = None) -> str:
    """Tag for a leaf -> entry link."""
    tag = f"{ENTRY_TAG}{format_timestamp(created)}"
    return f"{tag}:{link_tag}" if link_tag else tag
