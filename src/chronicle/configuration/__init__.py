# src/chronicle/configuration/__init__.py
"""Configuration objects for Chronicle.

Instead of passing a store around, you can pass a storage configuration
that knows how to build one.

Storage configurations:
- LocalStorage: SQLite database under a data directory
- MemoryStorage: in-process store for tests and scratch work

Example:
    from chronicle import LocalStorage, TimeIndex

    index = TimeIndex(storage=LocalStorage("./data"))
"""

from chronicle.configuration.base import StorageConfig
from chronicle.configuration.storage import LocalStorage, MemoryStorage

__all__ = [
    "StorageConfig",
    "LocalStorage",
    "MemoryStorage",
]
