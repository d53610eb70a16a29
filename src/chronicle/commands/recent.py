# src/chronicle/commands/recent.py
"""Recent command - show the most recent leaf bucket of an index."""

from __future__ import annotations

from pathlib import Path

from chronicle.commands.base import LinkInfo, RecentResult
from chronicle.config import ConfigError, get_time_index
from chronicle.errors import ChronicleError


def recent(
    index_name: str,
    link_tag: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> RecentResult:
    """Get the newest non-empty bucket at or before now.

    Args:
        index_name: Index to query
        link_tag: Only links indexed with this tag
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        RecentResult; ``links`` is empty when nothing has been indexed
    """
    try:
        time_index = get_time_index(data_dir, config_path)
    except Exception as e:
        return RecentResult(
            success=False, index=index_name, error=f"Failed to access database: {e}"
        )
    if isinstance(time_index, ConfigError):
        return RecentResult(success=False, index=index_name, error=time_index.message)

    try:
        bucket = time_index.get_most_recent_indexes(index_name, link_tag)
    except ChronicleError as e:
        return RecentResult(success=False, index=index_name, error=str(e))
    finally:
        time_index.close()

    if bucket is None:
        return RecentResult(success=True, index=index_name)
    return RecentResult(
        success=True,
        index=index_name,
        bucket_from=bucket.from_.isoformat(),
        bucket_until=bucket.until.isoformat(),
        links=[LinkInfo.from_link(link) for link in bucket.links],
    )
