# src/chronicle/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chronicle.stores import BackingStore

DB_FILENAME = "chronicle.db"


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    Entries and links are persisted to ``<data_dir>/chronicle.db``.

    Args:
        data_dir: Base directory for the database file.
                  Created if it doesn't exist.

    Example:
        index = TimeIndex(storage=LocalStorage("./my_data"))
    """

    data_dir: str

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_dir, DB_FILENAME)

    def build_store(self) -> BackingStore:
        """Build the SQLite store, creating the data directory if needed."""
        from chronicle.stores import SQLiteStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)
        return SQLiteStore(self.db_path)
