# src/chronicle/commands/__init__.py
"""UI-agnostic command layer for Chronicle.

This module provides command functions that the CLI (or any other UI) can
call. Commands return data structures, allowing UIs to render results
appropriately.

Usage:
    from chronicle.commands import index, span, status

    # Index an entry
    result = index.index("events", '{"kind": "login"}')

    # Newest first between two times
    result = span.span("events", "2024-03-18T00:00:00Z", "2024-03-11T00:00:00Z")

    # Get database status
    result = status.status()
"""

# Import command modules for easy access
from chronicle.commands import chunks, config_cmd, index, recent, remove, span, status
from chronicle.commands.base import (
    ChunkInfo,
    ChunksResult,
    CommandResult,
    ConfigResult,
    ConfirmCallback,
    ConfirmRequest,
    EntryInfo,
    IndexResult,
    LinkInfo,
    RecentResult,
    RemoveResult,
    SettingInfo,
    SpanResult,
    StatusResult,
)

__all__ = [
    # Base types
    "ConfirmRequest",
    "ConfirmCallback",
    "CommandResult",
    # Result types
    "IndexResult",
    "SpanResult",
    "LinkInfo",
    "EntryInfo",
    "RecentResult",
    "ChunksResult",
    "ChunkInfo",
    "RemoveResult",
    "StatusResult",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "index",
    "span",
    "recent",
    "chunks",
    "remove",
    "status",
    "config_cmd",
]
