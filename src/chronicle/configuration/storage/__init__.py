# src/chronicle/configuration/storage/__init__.py
"""Storage configurations."""

from chronicle.configuration.storage.local import LocalStorage
from chronicle.configuration.storage.memory import MemoryStorage

__all__ = ["LocalStorage", "MemoryStorage"]
