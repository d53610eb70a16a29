# src/chronicle/commands/chunks.py
"""Chunks command - inspect the chunk chain."""

from __future__ import annotations

from pathlib import Path

from chronicle.commands.base import ChunkInfo, ChunksResult
from chronicle.config import ConfigError, get_time_index
from chronicle.errors import ChronicleError, NotFound


def chunks(
    index_name: str | None = None,
    hops: int | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ChunksResult:
    """Describe the chunk chain.

    Args:
        index_name: Only list chunks holding entries of this index
        hops: Also walk this many chunks back from the current one
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ChunksResult with the current, genesis and latest chunks
    """
    try:
        time_index = get_time_index(data_dir, config_path)
    except Exception as e:
        return ChunksResult(
            success=False, index=index_name, error=f"Failed to access database: {e}"
        )
    if isinstance(time_index, ConfigError):
        return ChunksResult(success=False, index=index_name, error=time_index.message)

    try:
        current = time_index.get_current_chunk()
        result = ChunksResult(
            success=True,
            index=index_name,
            interval_seconds=int(time_index.get_max_chunk_interval().total_seconds()),
            current=ChunkInfo.from_chunk(current),
            chunks=[
                ChunkInfo.from_chunk(chunk) for chunk in time_index.materialized_chunks(index_name)
            ],
        )
        try:
            result.genesis = ChunkInfo.from_chunk(time_index.get_genesis_chunk())
            result.latest = ChunkInfo.from_chunk(time_index.get_latest_chunk())
            if hops is not None:
                result.previous = ChunkInfo.from_chunk(
                    time_index.get_previous_chunk(current, hops)
                )
        except NotFound:
            # Nothing indexed yet
            pass
    except ChronicleError as e:
        return ChunksResult(success=False, index=index_name, error=str(e))
    finally:
        time_index.close()

    return result
