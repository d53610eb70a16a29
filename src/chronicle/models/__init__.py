# src/chronicle/models/__init__.py
"""Data models for Chronicle."""

from chronicle.models.bucket import Bucket
from chronicle.models.chunk import Chunk
from chronicle.models.entry import Entry
from chronicle.models.link import (
    CHILD_TAG,
    CHUNK_TAG,
    ENTRY_TAG,
    INDEXED_IN_TAG,
    Link,
    entry_tag,
)

__all__ = [
    "Bucket",
    "Chunk",
    "Entry",
    "Link",
    "CHILD_TAG",
    "CHUNK_TAG",
    "ENTRY_TAG",
    "INDEXED_IN_TAG",
    "entry_tag",
]
