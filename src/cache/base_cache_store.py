# src/cache/base_cache_store.py — v3
"""Abstract cache store interface.

Stores hold CacheEntry objects with a TTL and keep track of every key they
issued so a namespace can be purged without backend-specific key scans.
Backend failures surface as CacheUnavailableError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from embedlrmi.cache.keys import make_key
from embedlrmi.cache.models import CacheEntry


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve a live cache entry (None if missing or expired)."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        """Store a value under key, expiring after ttl_s seconds (0 = never)."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a cache entry. Returns False when there was nothing to remove."""

    @abstractmethod
    async def keys(self, namespace: str) -> list[str]:
        """List tracked keys belonging to namespace."""

    def make_key(self, namespace: str, fragment: str) -> str:
        """Build a namespaced key from a raw fragment."""
        return make_key(namespace, fragment)

    def close(self) -> None:
        """Release backend resources."""
