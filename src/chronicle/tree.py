# src/chronicle/tree.py
"""Time tree: deterministic calendar trie per index.

Each index has a root node and one level per calendar field, down to the
configured granularity:

    (idx, ())
      (idx, (2024,))
        (idx, (2024, 3))
          (idx, (2024, 3, 17))
            ...
              (idx, (2024, 3, 17, 14, 2, 7))   <- leaf bucket

A node's address is the content address of ``(index, path)``. No node ever
needs to be looked up before it can be linked to, and concurrent writers
that create the same node resolve to one stored record.
"""

from __future__ import annotations

import logging
from datetime import MAXYEAR, UTC, datetime, timedelta
from typing import Any

from chronicle.addressing import Address, content_address
from chronicle.models import CHILD_TAG
from chronicle.settings import TIME_UNITS, Settings
from chronicle.stores.base import BackingStore
from chronicle.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

TimePath = tuple[int, ...]

# Whole-tree bounds used for the root node
MIN_TIME = datetime.min.replace(tzinfo=UTC)
MAX_TIME = datetime.max.replace(tzinfo=UTC)

_FIXED_UNITS = {
    "day": timedelta(days=1),
    "hour": timedelta(hours=1),
    "minute": timedelta(minutes=1),
    "second": timedelta(seconds=1),
}


def node_record(index: str, path: TimePath) -> dict[str, Any]:
    return {"kind": "time_node", "index": index, "path": list(path)}


def node_address(index: str, path: TimePath = ()) -> Address:
    """Address of the node at ``path`` under ``index``. Pure, no I/O."""
    return content_address(node_record(index, path))


def window_for(path: TimePath) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` range of time covered by the node at ``path``."""
    if not path:
        return MIN_TIME, MAX_TIME
    # Missing finer fields default to the start of the unit
    fields = list(path) + [1, 1, 0, 0, 0][len(path) - 1 :]
    start = datetime(*fields[:6], tzinfo=UTC)
    unit = TIME_UNITS[len(path) - 1]
    if unit == "year":
        end = start.replace(year=start.year + 1) if start.year < MAXYEAR else MAX_TIME
    elif unit == "month" and start.month == 12:
        end = start.replace(year=start.year + 1, month=1) if start.year < MAXYEAR else MAX_TIME
    elif unit == "month":
        end = start.replace(month=start.month + 1)
    elif MAX_TIME - start < _FIXED_UNITS[unit]:
        end = MAX_TIME
    else:
        end = start + _FIXED_UNITS[unit]
    return start, end


class TimeTree:
    """Builds and addresses the per-index time tree."""

    def __init__(self, store: BackingStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    @property
    def depth(self) -> int:
        """Number of calendar levels below the root."""
        return len(self.settings.time_units)

    def path_for(self, moment: datetime | str) -> TimePath:
        """UTC calendar coordinates of ``moment`` down to the configured granularity."""
        moment = parse_timestamp(moment)
        return tuple(getattr(moment, unit) for unit in self.settings.time_units)

    def node_address(self, index: str, path: TimePath = ()) -> Address:
        return node_address(index, path)

    def root_address(self, index: str) -> Address:
        return node_address(index, ())

    def leaf_address(self, index: str, moment: datetime | str) -> Address:
        return node_address(index, self.path_for(moment))

    def ensure_path(self, index: str, moment: datetime | str) -> Address:
        """Create any missing node on the path to ``moment`` and return the leaf.

        Every step is a create-if-absent put plus an idempotent parent -> child
        link, so racing with another writer on the same bucket is harmless.
        """
        path = self.path_for(moment)
        parent = self.store.put(node_record(index, ()))
        for depth in range(1, len(path) + 1):
            prefix = path[:depth]
            child = self.store.put(node_record(index, prefix))
            self.store.link(parent, child, f"{CHILD_TAG}{prefix[-1]}")
            parent = child
        logger.debug("Ensured time path %s for index %r", path, index)
        return parent
