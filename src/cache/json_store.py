# src/cache/json_store.py — v3
"""JSON file-based cache store (default CACHE_BACKEND=json).

Stores cache entries as individual JSON files under CACHE_ROOT.
Expired entries are removed lazily on read.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from embedlrmi.cache.base_cache_store import BaseCacheStore
from embedlrmi.cache.keys import namespace_prefix
from embedlrmi.cache.models import CacheEntry
from embedlrmi.core.errors import CacheUnavailableError

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(
        self, cache_root: Path | str, clock: Callable[[], float] = time.time
    ) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        path = self._entry_path(key)
        try:
            if not path.exists():
                return None
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CacheUnavailableError(f"Cannot read cache entry {key}: {e}") from e

        try:
            entry = CacheEntry(**json.loads(raw))
        except Exception as e:
            logger.warning("Failed to read cache entry %s: %s", key, e)
            return None

        if entry.is_expired(self._clock()):
            await self.delete(key)
            return None
        return entry

    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        """Store a cache entry."""
        entry = CacheEntry(key=key, payload=value, stored_at=self._clock(), ttl_s=ttl_s)
        path = self._entry_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise CacheUnavailableError(f"Cannot write cache entry {key}: {e}") from e

    async def delete(self, key: str) -> bool:
        """Remove a cache entry file."""
        path = self._entry_path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheUnavailableError(f"Cannot delete cache entry {key}: {e}") from e
        return True

    async def keys(self, namespace: str) -> list[str]:
        """List keys of all entry files in the namespace."""
        prefix = namespace_prefix(namespace)
        found: list[str] = []
        if not self._root.is_dir():
            return found

        for path in self._root.glob("*.json"):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except Exception:
                continue
            key = data.get("key") if isinstance(data, dict) else None
            if isinstance(key, str) and key.startswith(prefix):
                found.append(key)

        return found

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = key.replace("/", "_").replace("\\", "_").replace(":", "_")
        return self._root / f"{safe_key}.json"
