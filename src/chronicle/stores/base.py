# src/chronicle/stores/base.py
"""Abstract base class for the backing store.

The time index only relies on two primitives: content-addressed entry
storage and link enumeration from a single address. There are no range
queries, no global ordering and no transactions.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from chronicle.addressing import Address
from chronicle.models import Link


class BackingStore(ABC):
    """Content-addressed entries plus taggable links between addresses."""

    @abstractmethod
    def put(self, content: Mapping[str, Any]) -> Address:
        """Store content and return its address. Idempotent for identical content."""
        ...

    @abstractmethod
    def get(self, address: Address) -> dict[str, Any] | None:
        """Retrieve content by address. Returns None if not found."""
        ...

    @abstractmethod
    def link(self, source: Address, target: Address, tag: str) -> Link:
        """Create a link. Idempotent; re-linking a revoked link revives it."""
        ...

    @abstractmethod
    def unlink(self, source: Address, target: Address, tag: str) -> None:
        """Revoke a link. Revoking an absent link is a no-op."""
        ...

    @abstractmethod
    def links_from(self, source: Address, tag_prefix: str | None = None) -> set[Link]:
        """Enumerate live links from an address, optionally filtered by tag prefix."""
        ...

    @abstractmethod
    def count_entries(self) -> int:
        """Count the total number of stored entries."""
        ...

    @abstractmethod
    def count_links(self) -> int:
        """Count the total number of live links."""
        ...

    def close(self) -> None:  # noqa: B027
        """Release any resources held by the store."""
