# src/gateway/metadata_gateway.py — v2
"""Metadata cache gateway: get-or-fetch in front of the provider.

Read path:
  1. Derive the cache key from the canonical URL (namespace + SHA-256).
  2. Cache hit → return the stored payload, no network.
  3. Cache miss → one provider call, store the decoded payload with the TTL
     (even when it carries no nodes), return it.

Every per-request failure (transport, parse, cache backend) degrades to
None: LRMI metadata is an enhancement, never a rendering requirement.

Concurrent misses for the same key share one provider call when
single_flight is on. This only coalesces within one event loop; separate
processes may still both hit the provider (last write wins).

Known race: an invalidate() landing between a fetch's cache miss and its
cache write lets the just-fetched value be written after the delete.
"""

from __future__ import annotations

import asyncio
import logging

from embedlrmi.cache.base_cache_store import BaseCacheStore
from embedlrmi.cache.keys import DEFAULT_NAMESPACE, url_fingerprint
from embedlrmi.cache.models import CacheEntry
from embedlrmi.config.settings import DEFAULT_CACHE_EXPIRY
from embedlrmi.core.errors import DEGRADABLE_ERRORS, CacheUnavailableError
from embedlrmi.core.payload import MetadataPayload
from embedlrmi.logging.context import set_lookup_context
from embedlrmi.provider.base_provider import BaseMetadataProvider

logger = logging.getLogger(__name__)


class MetadataCacheGateway:
    """Cache-fronted access to provider metadata."""

    def __init__(
        self,
        store: BaseCacheStore,
        provider: BaseMetadataProvider,
        ttl_s: int = DEFAULT_CACHE_EXPIRY,
        namespace: str = DEFAULT_NAMESPACE,
        single_flight: bool = True,
    ) -> None:
        if ttl_s < 0:
            raise ValueError("ttl_s must be >= 0")
        self._store = store
        self._provider = provider
        self._ttl_s = ttl_s
        self._namespace = namespace
        self._single_flight = single_flight
        self._inflight: dict[str, asyncio.Task[MetadataPayload | None]] = {}
        self._inflight_lock = asyncio.Lock()

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    @property
    def ttl_s(self) -> int:
        return self._ttl_s

    @property
    def namespace(self) -> str:
        return self._namespace

    def cache_key(self, canonical_url: str) -> str:
        """Deterministic cache key for a canonical URL."""
        return self._store.make_key(self._namespace, url_fingerprint(canonical_url))

    # --- Contract A ---

    async def fetch_metadata(
        self, canonical_url: str, ttl_s: int | None = None
    ) -> MetadataPayload | None:
        """Return the payload for canonical_url, from cache or provider.

        Returns None when the provider is unreachable or answers garbage.
        """
        key = self.cache_key(canonical_url)
        set_lookup_context(canonical_url, key)

        cached = await self._read_cache(key)
        if cached is not None:
            logger.debug("Cache hit for %s", canonical_url)
            return cached.payload

        logger.debug("Cache miss for %s", canonical_url)
        ttl = self._ttl_s if ttl_s is None else ttl_s

        if not self._single_flight:
            return await self._fetch_and_store(canonical_url, key, ttl)

        task = await self._get_or_create_inflight(canonical_url, key, ttl)
        return await asyncio.shield(task)

    # --- Contract B ---

    async def invalidate(self, canonical_url: str) -> None:
        """Delete the cache entry for canonical_url (no-op when absent)."""
        key = self.cache_key(canonical_url)
        set_lookup_context(canonical_url, key)

        async with self._inflight_lock:
            self._inflight.pop(key, None)

        try:
            await self._store.delete(key)
        except CacheUnavailableError as e:
            logger.warning("Cache invalidation failed for %s: %s", canonical_url, e)
            return
        logger.info("LRMI cache cleared for %s", canonical_url)

    # --- Contract C ---

    async def purge_all(self) -> int:
        """Delete every tracked entry in the gateway namespace.

        Returns:
            Number of keys deleted.
        """
        keys = await self._store.keys(self._namespace)
        deleted = 0
        for key in keys:
            # Index members whose value already expired do not count
            if await self._store.delete(key):
                deleted += 1

        async with self._inflight_lock:
            self._inflight.clear()

        logger.info("LRMI cache purged: %d entries in namespace %r", deleted, self._namespace)
        return deleted

    # --- Internals ---

    async def _read_cache(self, key: str) -> CacheEntry | None:
        try:
            return await self._store.get(key)
        except CacheUnavailableError as e:
            logger.warning("Cache unavailable, fetching directly: %s", e)
            return None

    async def _fetch_and_store(
        self, canonical_url: str, key: str, ttl_s: int
    ) -> MetadataPayload | None:
        try:
            payload = await self._provider.fetch(canonical_url)
        except DEGRADABLE_ERRORS as e:
            logger.warning(
                "LRMI lookup failed for %s via %s: %s",
                canonical_url, self._provider.provider_name, e,
            )
            return None

        try:
            await self._store.set(key, payload, ttl_s)
        except CacheUnavailableError as e:
            logger.warning("Cache write failed for %s: %s", canonical_url, e)
        else:
            logger.debug("LRMI data stored in cache for %s (ttl=%ds)", canonical_url, ttl_s)
        return payload

    async def _get_or_create_inflight(
        self, canonical_url: str, key: str, ttl_s: int
    ) -> asyncio.Task[MetadataPayload | None]:
        async with self._inflight_lock:
            task = self._inflight.get(key)
            if task is not None:
                logger.debug("Joining in-flight lookup for %s", canonical_url)
                return task
            loop = asyncio.get_running_loop()
            task = loop.create_task(self._fetch_and_store(canonical_url, key, ttl_s))
            self._inflight[key] = task
            # Runs even when every awaiting caller was cancelled
            task.add_done_callback(lambda done: self._clear_inflight(key, done))
            return task

    def _clear_inflight(
        self, key: str, task: asyncio.Task[MetadataPayload | None]
    ) -> None:
        if self._inflight.get(key) is task:
            self._inflight.pop(key, None)
