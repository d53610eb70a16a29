# src/chronicle/stores/__init__.py
"""Backing store abstractions for Chronicle."""

from chronicle.stores.base import BackingStore
from chronicle.stores.memory import MemoryStore
from chronicle.stores.sqlite import SQLiteStore

__all__ = [
    "BackingStore",
    "MemoryStore",
    "SQLiteStore",
]
