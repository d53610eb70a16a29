# src/chronicle/commands/span.py
"""Span command - list index entries between two times.

The order of the bounds picks the order of the results: pass the later
time first to get newest first.
"""

from __future__ import annotations

from pathlib import Path

from chronicle.commands.base import EntryInfo, LinkInfo, SpanResult
from chronicle.config import ConfigError, get_time_index
from chronicle.errors import ChronicleError, PartialResult
from chronicle.timestamps import parse_timestamp


def span(
    index_name: str,
    from_: str,
    until: str,
    limit: int | None = None,
    load: bool = False,
    link_tag: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> SpanResult:
    """Query an index for a time span.

    Args:
        index_name: Index to query
        from_: Starting bound (ISO-8601)
        until: Ending bound (ISO-8601)
        limit: Maximum number of links (default: settings.default_limit)
        load: Also load entry contents
        link_tag: Only links indexed with this tag
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        SpanResult with links (and entries when loading)
    """
    result = SpanResult(success=False, index=index_name, from_=from_, until=until)

    try:
        result.descending = parse_timestamp(from_) > parse_timestamp(until)
    except ChronicleError as e:
        result.error = str(e)
        return result

    try:
        time_index = get_time_index(data_dir, config_path)
    except Exception as e:
        result.error = f"Failed to access database: {e}"
        return result
    if isinstance(time_index, ConfigError):
        result.error = time_index.message
        return result

    try:
        links = time_index.get_links_for_time_span(index_name, from_, until, limit, link_tag)
        result.links = [LinkInfo.from_link(link) for link in links]
        if load:
            try:
                entries = time_index.load_entries(links, strict=True)
            except PartialResult as e:
                entries = e.entries
                result.missing = list(e.missing)
            result.entries = [EntryInfo.from_entry(entry) for entry in entries]
    except ChronicleError as e:
        result.error = str(e)
        return result
    finally:
        time_index.close()

    result.success = True
    return result
