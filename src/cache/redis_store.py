# src/cache/redis_store.py — v3
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for multi-instance deployments. Expiry is delegated to Redis;
a tracked index set per namespace makes bulk purge possible.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from embedlrmi.cache.base_cache_store import BaseCacheStore
from embedlrmi.cache.keys import namespace_prefix
from embedlrmi.cache.models import CacheEntry
from embedlrmi.core.errors import CacheUnavailableError

logger = logging.getLogger(__name__)

_INDEX_SUFFIX = "__index__"


def _index_key(namespace: str) -> str:
    return f"{namespace_prefix(namespace)}{_INDEX_SUFFIX}"


def _namespace_of(key: str) -> str:
    return key.split(":", 1)[0]


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for distributed deployments."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._errors: tuple[type[BaseException], ...] = (redis.RedisError,)

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        try:
            data = self._client.get(key)
        except self._errors as e:
            raise CacheUnavailableError(f"Redis GET failed for {key}: {e}") from e
        if data is None:
            return None
        try:
            return CacheEntry(**json.loads(data))
        except Exception as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        """Store a cache entry with native expiry."""
        entry = CacheEntry(key=key, payload=value, stored_at=time.time(), ttl_s=ttl_s)
        try:
            if ttl_s > 0:
                self._client.set(key, entry.model_dump_json(), ex=ttl_s)
            else:
                self._client.set(key, entry.model_dump_json())
            # Maintain a set of issued keys for namespace purge
            self._client.sadd(_index_key(_namespace_of(key)), key)
        except self._errors as e:
            raise CacheUnavailableError(f"Redis SET failed for {key}: {e}") from e

    async def delete(self, key: str) -> bool:
        """Remove a cache entry and its index member.

        False when Redis had already expired the value.
        """
        try:
            removed = self._client.delete(key)
            self._client.srem(_index_key(_namespace_of(key)), key)
        except self._errors as e:
            raise CacheUnavailableError(f"Redis DELETE failed for {key}: {e}") from e
        return bool(removed)

    async def keys(self, namespace: str) -> list[str]:
        """List tracked keys (may include keys Redis already expired)."""
        try:
            return sorted(self._client.smembers(_index_key(namespace)))
        except self._errors as e:
            raise CacheUnavailableError(f"Redis SMEMBERS failed: {e}") from e

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
