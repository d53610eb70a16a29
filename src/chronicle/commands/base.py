# src/chronicle/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Confirm callbacks for destructive commands (like remove)
- Result types for each command

Timestamps in results are ISO-8601 strings so UIs can print them as-is.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chronicle.models import Chunk, Entry, Link


@dataclass
class ConfirmRequest:
    """Request for a yes/no confirmation before a destructive action.

    Attributes:
        message: The question to display to the user
        details: Additional context about what will happen
    """

    message: str
    details: str | None = None


# Callback type for confirmations - returns True to proceed
ConfirmCallback = Callable[[ConfirmRequest], bool]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class LinkInfo:
    """A single index link."""

    target: str
    created: str
    tag: str
    link_tag: str | None = None

    @classmethod
    def from_link(cls, link: Link) -> LinkInfo:
        created = link.created
        return cls(
            target=link.target,
            created=created.isoformat() if created is not None else "",
            tag=link.tag,
            link_tag=link.link_tag,
        )


@dataclass
class EntryInfo:
    """A loaded entry."""

    address: str
    created: str
    content: dict = field(default_factory=dict)

    @classmethod
    def from_entry(cls, entry: Entry) -> EntryInfo:
        return cls(address=entry.address, created=entry.created.isoformat(), content=entry.content)


@dataclass
class ChunkInfo:
    """A chunk window and its address."""

    from_: str
    until: str
    address: str

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> ChunkInfo:
        return cls(
            from_=chunk.from_.isoformat(),
            until=chunk.until.isoformat(),
            address=chunk.address,
        )


@dataclass
class IndexResult(CommandResult):
    """Result of the index command.

    Attributes:
        index: Index the entry was written into
        address: Address of the stored entry
        created: Creation time the entry was indexed at
    """

    index: str = ""
    address: str = ""
    created: str = ""


@dataclass
class SpanResult(CommandResult):
    """Result of the span command.

    Attributes:
        index: Index that was queried
        from_: Starting bound as given
        until: Ending bound as given
        descending: True when results run newest first
        links: Index links in traversal order
        entries: Loaded entries (only when loading was requested)
        missing: Addresses that could not be loaded
    """

    index: str = ""
    from_: str = ""
    until: str = ""
    descending: bool = False
    links: list[LinkInfo] = field(default_factory=list)
    entries: list[EntryInfo] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@dataclass
class RecentResult(CommandResult):
    """Result of the recent command.

    Attributes:
        index: Index that was queried
        bucket_from: Start of the most recent non-empty leaf bucket
        bucket_until: End of that bucket
        links: Links in the bucket, newest first
    """

    index: str = ""
    bucket_from: str | None = None
    bucket_until: str | None = None
    links: list[LinkInfo] = field(default_factory=list)


@dataclass
class ChunksResult(CommandResult):
    """Result of the chunks command.

    Attributes:
        index: Index the listing is scoped to (None for all indexes)
        interval_seconds: Chunk width
        current: Chunk covering now
        genesis: Earliest materialized chunk (None before first entry)
        latest: Most recent materialized chunk (None before first entry)
        previous: Chunk reached by walking back from current
        chunks: Materialized chunks, oldest first
    """

    index: str | None = None
    interval_seconds: int = 0
    current: ChunkInfo | None = None
    genesis: ChunkInfo | None = None
    latest: ChunkInfo | None = None
    previous: ChunkInfo | None = None
    chunks: list[ChunkInfo] = field(default_factory=list)


@dataclass
class RemoveResult(CommandResult):
    """Result of the remove command.

    Attributes:
        target: Entry address that was removed from the index
        index: Index it was removed from (None for every index)
        revoked: Number of index links revoked (0 if nothing was indexed)
    """

    target: str = ""
    index: str | None = None
    revoked: int = 0


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        data_dir: Data directory that was inspected
        total_entries: Stored records (entries, tree nodes, chunks)
        total_links: Live links
        total_chunks: Materialized chunks
        genesis: Start of the genesis chunk, if any
        latest: Start of the most recent chunk, if any
    """

    data_dir: str = ""
    total_entries: int = 0
    total_links: int = 0
    total_chunks: int = 0
    genesis: str | None = None
    latest: str | None = None


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "preset", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        storage: Storage kind (local, memory)
        data_dir: Data directory path
        settings: List of index settings with sources
        config_path: Path to config file (if found)
        warnings: Problems found while validating the config file
    """

    storage: str = "local"
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
    warnings: list[str] = field(default_factory=list)
