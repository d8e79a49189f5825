# src/cache/sqlite_store.py — v3
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3 — no external dependency.
Better than JSON files when many pages are cached.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from embedlrmi.cache.base_cache_store import BaseCacheStore
from embedlrmi.cache.keys import namespace_prefix
from embedlrmi.cache.models import CacheEntry
from embedlrmi.core.errors import CacheUnavailableError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    data TEXT NOT NULL,
    expires_at REAL
);
CREATE INDEX IF NOT EXISTS idx_expires_at ON cache_entries(expires_at);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(
        self, db_path: Path | str, clock: Callable[[], float] = time.time
    ) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        try:
            cursor = self._conn.execute(
                "SELECT data FROM cache_entries WHERE key = ?", (key,)
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise CacheUnavailableError(f"SQLite read failed for {key}: {e}") from e
        if row is None:
            return None
        try:
            entry = CacheEntry(**json.loads(row[0]))
        except Exception as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

        if entry.is_expired(self._clock()):
            await self.delete(key)
            return None
        return entry

    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        """Store a cache entry (upsert)."""
        entry = CacheEntry(key=key, payload=value, stored_at=self._clock(), ttl_s=ttl_s)
        try:
            self._conn.execute(
                """INSERT OR REPLACE INTO cache_entries (key, data, expires_at)
                   VALUES (?, ?, ?)""",
                (key, entry.model_dump_json(), entry.expires_at),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise CacheUnavailableError(f"SQLite write failed for {key}: {e}") from e

    async def delete(self, key: str) -> bool:
        """Remove a cache entry."""
        try:
            cursor = self._conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
            self._conn.commit()
        except sqlite3.Error as e:
            raise CacheUnavailableError(f"SQLite delete failed for {key}: {e}") from e
        return cursor.rowcount > 0

    async def keys(self, namespace: str) -> list[str]:
        """List keys stored under the namespace prefix."""
        prefix = namespace_prefix(namespace)
        try:
            cursor = self._conn.execute(
                "SELECT key FROM cache_entries WHERE substr(key, 1, ?) = ?",
                (len(prefix), prefix),
            )
            return [row[0] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise CacheUnavailableError(f"SQLite key scan failed: {e}") from e

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
