# src/chronicle/stores/memory.py
"""In-memory backing store."""

import json
from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from chronicle.addressing import Address, canonical_json, content_address
from chronicle.models import Link
from chronicle.stores.base import BackingStore


class MemoryStore(BackingStore):
    """Dict-backed store for tests and single-process use.

    Revoked links are kept with a tombstone flag rather than dropped, the
    same way the SQLite store keeps them.
    """

    def __init__(self) -> None:
        self._entries: dict[Address, str] = {}
        # source -> {(target, tag): revoked}
        self._links: defaultdict[Address, dict[tuple[Address, str], bool]] = defaultdict(dict)

    def put(self, content: Mapping[str, Any]) -> Address:
        address = content_address(content)
        # Content is immutable once stored
        self._entries.setdefault(address, canonical_json(content))
        return address

    def get(self, address: Address) -> dict[str, Any] | None:
        raw = self._entries.get(address)
        if raw is None:
            return None
        return json.loads(raw)

    def link(self, source: Address, target: Address, tag: str) -> Link:
        self._links[source][(target, tag)] = False
        return Link(source=source, target=target, tag=tag)

    def unlink(self, source: Address, target: Address, tag: str) -> None:
        links = self._links.get(source)
        if links is not None and (target, tag) in links:
            links[(target, tag)] = True

    def links_from(self, source: Address, tag_prefix: str | None = None) -> set[Link]:
        links = self._links.get(source, {})
        return {
            Link(source=source, target=target, tag=tag)
            for (target, tag), revoked in links.items()
            if not revoked and (tag_prefix is None or tag.startswith(tag_prefix))
        }

    def count_entries(self) -> int:
        return len(self._entries)

    def count_links(self) -> int:
        return sum(
            1 for links in self._links.values() for revoked in links.values() if not revoked
        )
