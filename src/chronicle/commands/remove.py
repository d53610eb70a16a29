# src/chronicle/commands/remove.py
"""Remove command - revoke an entry from the index.

This module provides the remove logic that the CLI uses. It uses a
callback for interactive confirmation, so each UI can confirm its own way.
The entry itself stays in the store; only its index links are revoked.
"""

from __future__ import annotations

from pathlib import Path

from chronicle.commands.base import ConfirmCallback, ConfirmRequest, RemoveResult
from chronicle.config import ConfigError, get_time_index
from chronicle.errors import ChronicleError


def remove(
    target: str,
    index_name: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> RemoveResult:
    """Remove an entry from one index, or from every index.

    Args:
        target: Address of the indexed entry
        index_name: Only remove it from this index
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional callback for confirmation. Return True to
            proceed, False to cancel. If None, removal proceeds without
            confirmation (equivalent to --force).

    Returns:
        RemoveResult with the number of revoked links
    """
    result = RemoveResult(success=False, target=target, index=index_name)

    try:
        time_index = get_time_index(data_dir, config_path)
    except Exception as e:
        result.error = f"Failed to access database: {e}"
        return result
    if isinstance(time_index, ConfigError):
        result.error = time_index.message
        return result

    try:
        if on_confirm is not None:
            scope = f"index '{index_name}'" if index_name else "every index"
            confirm_request = ConfirmRequest(
                message=f"Remove {target[:12]} from {scope}?",
                details="The entry stays in the store and can still be loaded by address.",
            )
            if not on_confirm(confirm_request):
                result.error = "Cancelled."
                return result

        result.revoked = time_index.remove_index(target, index_name)
    except ChronicleError as e:
        result.error = str(e)
        return result
    finally:
        time_index.close()

    result.success = True
    return result
