# src/chronicle/commands/status.py
"""Status command - show database statistics.

This module provides the status logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

from chronicle.chunks import ChunkChain
from chronicle.commands.base import StatusResult
from chronicle.config import build_settings, get_store, load_config, resolve_data_dir


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> StatusResult:
    """Get database statistics.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        StatusResult with database statistics
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return StatusResult(success=True, data_dir=effective_data_dir)

    try:
        store = get_store(effective_data_dir)
        settings = build_settings(config)
    except Exception as e:
        return StatusResult(
            success=False,
            data_dir=effective_data_dir,
            error=f"Failed to access database: {e}",
        )

    try:
        materialized = ChunkChain(store, settings).materialized_chunks()
        result = StatusResult(
            success=True,
            data_dir=effective_data_dir,
            total_entries=store.count_entries(),
            total_links=store.count_links(),
            total_chunks=len(materialized),
        )
    finally:
        store.close()

    if materialized:
        result.genesis = materialized[0].from_.isoformat()
        result.latest = materialized[-1].from_.isoformat()
    return result
