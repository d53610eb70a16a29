# src/chronicle/configuration/storage/memory.py
"""In-process storage configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chronicle.stores import BackingStore


@dataclass(frozen=True)
class MemoryStorage:
    """Throwaway in-memory storage. Nothing survives the process."""

    def build_store(self) -> BackingStore:
        from chronicle.stores import MemoryStore

        return MemoryStore()
