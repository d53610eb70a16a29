# src/chronicle/stores/sqlite.py
"""SQLite backing store implementation."""

import json
import logging
import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from chronicle.addressing import Address, canonical_json, content_address
from chronicle.errors import StoreUnavailable
from chronicle.models import Link
from chronicle.stores.base import BackingStore

logger = logging.getLogger(__name__)


class SQLiteStore(BackingStore):
    """SQLite-based content-addressed store.

    Links are never deleted; ``unlink`` sets the ``revoked`` tombstone and
    enumeration skips revoked rows.
    """

    def __init__(self, db_path: str, timeout: float = 5.0) -> None:
        """Initialize the SQLite store.

        Args:
            db_path: Path to SQLite database file
            timeout: Seconds to wait on a locked database before failing
        """
        self.db_path = db_path
        self.timeout = timeout
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, surfacing lock/IO failures as StoreUnavailable."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        except sqlite3.OperationalError as e:
            raise StoreUnavailable(f"Cannot open {self.db_path}: {e}") from e
        try:
            with conn:
                yield conn
        except sqlite3.OperationalError as e:
            logger.warning("SQLite store %s unavailable: %s", self.db_path, e)
            raise StoreUnavailable(f"Store operation failed: {e}") from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    address TEXT PRIMARY KEY,
                    content TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS links (
                    source TEXT NOT NULL,
                    target TEXT NOT NULL,
                    tag TEXT NOT NULL,
                    revoked INTEGER NOT NULL DEFAULT 0,
                    PRIMARY KEY (source, target, tag)
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_links_source ON links(source, tag)")

    def put(self, content: Mapping[str, Any]) -> Address:
        """Store content under its address, ignoring duplicates."""
        address = content_address(content)
        with self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO entries (address, content) VALUES (?, ?)",
                (address, canonical_json(content)),
            )
        return address

    def get(self, address: Address) -> dict[str, Any] | None:
        """Retrieve content by address."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT content FROM entries WHERE address = ?",
                (address,),
            ).fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    def link(self, source: Address, target: Address, tag: str) -> Link:
        """Create a link, clearing any tombstone left by a previous unlink."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO links (source, target, tag, revoked)
                VALUES (?, ?, ?, 0)
                ON CONFLICT (source, target, tag) DO UPDATE SET revoked = 0
                """,
                (source, target, tag),
            )
        return Link(source=source, target=target, tag=tag)

    def unlink(self, source: Address, target: Address, tag: str) -> None:
        """Mark a link revoked."""
        with self._connect() as conn:
            conn.execute(
                "UPDATE links SET revoked = 1 WHERE source = ? AND target = ? AND tag = ?",
                (source, target, tag),
            )

    def links_from(self, source: Address, tag_prefix: str | None = None) -> set[Link]:
        """Enumerate live links from an address."""
        with self._connect() as conn:
            if tag_prefix is None:
                cursor = conn.execute(
                    "SELECT target, tag FROM links WHERE source = ? AND revoked = 0",
                    (source,),
                )
            else:
                cursor = conn.execute(
                    """
                    SELECT target, tag FROM links
                    WHERE source = ? AND revoked = 0 AND substr(tag, 1, ?) = ?
                    """,
                    (source, len(tag_prefix), tag_prefix),
                )
            rows = cursor.fetchall()
        return {Link(source=source, target=row[0], tag=row[1]) for row in rows}

    def count_entries(self) -> int:
        """Count the total number of stored entries."""
        with self._connect() as conn:
            count = conn.execute("SELECT COUNT(address) FROM entries").fetchone()
        return count[0] if count else 0

    def count_links(self) -> int:
        """Count the total number of live links."""
        with self._connect() as conn:
            count = conn.execute("SELECT COUNT(*) FROM links WHERE revoked = 0").fetchone()
        return count[0] if count else 0
