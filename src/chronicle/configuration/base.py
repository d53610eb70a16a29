# src/chronicle/configuration/base.py
"""Protocol definitions for configuration objects.

A storage configuration knows how to build the backing store a TimeIndex
runs on. Implementations are plain frozen dataclasses; anything with a
matching ``build_store`` method satisfies the protocol.

Design Note: Why a Protocol here vs the ABC in stores/base.py?

- **Protocol (here):** Structural typing for configuration factories. A
  caller can hand in their own frozen dataclass without importing ours.

- **ABC (stores):** Nominal typing requiring explicit inheritance, for
  store implementations that share behavior such as ``close``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chronicle.stores import BackingStore


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_store(self) -> BackingStore: ...
    """

    def build_store(self) -> BackingStore:
        """Build the backing store."""
        ...
