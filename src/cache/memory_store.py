# src/cache/memory_store.py — v2
"""In-process cache store (CACHE_BACKEND=memory).

Entries live in a dict for the lifetime of the process. The clock is
injectable so TTL expiry can be driven from tests.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from embedlrmi.cache.base_cache_store import BaseCacheStore
from embedlrmi.cache.keys import namespace_prefix
from embedlrmi.cache.models import CacheEntry


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed cache store."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock

    async def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry

    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        self._entries[key] = CacheEntry(
            key=key, payload=value, stored_at=self._clock(), ttl_s=ttl_s
        )

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def keys(self, namespace: str) -> list[str]:
        prefix = namespace_prefix(namespace)
        return [k for k in self._entries if k.startswith(prefix)]

    def __len__(self) -> int:
        return len(self._entries)
