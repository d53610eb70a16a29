# src/chronicle/commands/index.py
"""Index command - store an entry and add it to an index.

This module provides the indexing logic that the CLI uses.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from chronicle.commands.base import IndexResult
from chronicle.config import ConfigError, get_time_index
from chronicle.errors import ChronicleError


def index(
    index_name: str,
    content: str | dict[str, Any],
    created: str | None = None,
    link_tag: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> IndexResult:
    """Index one entry.

    Args:
        index_name: Index to write into
        content: Entry payload, as a dict or a JSON object string
        created: ISO-8601 creation time (default: now)
        link_tag: Optional label stored on the index link
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        IndexResult with the entry address
    """
    if isinstance(content, str):
        try:
            content = json.loads(content)
        except json.JSONDecodeError as e:
            return IndexResult(success=False, index=index_name, error=f"Invalid JSON content: {e}")
    if not isinstance(content, dict):
        return IndexResult(
            success=False, index=index_name, error="Content must be a JSON object"
        )

    try:
        time_index = get_time_index(data_dir, config_path)
    except Exception as e:
        return IndexResult(success=False, index=index_name, error=f"Failed to access database: {e}")
    if isinstance(time_index, ConfigError):
        return IndexResult(success=False, index=index_name, error=time_index.message)

    try:
        address = time_index.index_entry(index_name, content, created, link_tag)
        entry = time_index.get_entry(address)
    except ChronicleError as e:
        return IndexResult(success=False, index=index_name, error=str(e))
    finally:
        time_index.close()

    return IndexResult(
        success=True,
        index=index_name,
        address=address,
        created=entry.created.isoformat() if entry is not None else "",
    )
