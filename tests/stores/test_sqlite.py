# tests/stores/test_sqlite.py
"""Tests for the SQLite backing store."""

import os
import sqlite3

import pytest

from chronicle.errors import StoreUnavailable
from chronicle.stores.base import BackingStore
from chronicle.stores.sqlite import SQLiteStore


@pytest.fixture
def temp_db(temp_dir):
    """Path to a temporary database file."""
    return os.path.join(temp_dir, "test.db")


@pytest.fixture
def sqlite_store(temp_db):
    return SQLiteStore(temp_db)


class TestSQLiteStore:
    def test_is_backing_store(self, sqlite_store):
        assert isinstance(sqlite_store, BackingStore)

    def test_creates_parent_directory(self, temp_dir):
        path = os.path.join(temp_dir, "nested", "deeper", "test.db")
        SQLiteStore(path)
        assert os.path.exists(path)

    def test_persists_across_instances(self, temp_db):
        first = SQLiteStore(temp_db)
        address = first.put({"a": 1})
        first.link("src", address, "entry:x")

        second = SQLiteStore(temp_db)
        assert second.get(address) == {"a": 1}
        assert {link.target for link in second.links_from("src")} == {address}

    def test_unlink_keeps_tombstone_row(self, sqlite_store, temp_db):
        sqlite_store.link("src", "dst", "entry:x")
        sqlite_store.unlink("src", "dst", "entry:x")

        with sqlite3.connect(temp_db) as conn:
            rows = conn.execute("SELECT revoked FROM links").fetchall()
        assert rows == [(1,)]

    def test_count_entries(self, sqlite_store):
        assert sqlite_store.count_entries() == 0
        sqlite_store.put({"a": 1})
        sqlite_store.put({"a": 1})
        sqlite_store.put({"a": 2})
        assert sqlite_store.count_entries() == 2

    def test_unopenable_path_is_unavailable(self, temp_dir):
        # A directory cannot be opened as a database file
        with pytest.raises(StoreUnavailable):
            SQLiteStore(temp_dir)
