# tests/unit/cache/test_cache_models.py — v1
"""Tests for cache/models.py — CacheEntry expiry."""

from __future__ import annotations

from embedlrmi.cache.models import CacheEntry


class TestCacheEntry:
    def test_expires_at(self):
        entry = CacheEntry(key="k", payload={"nodes": []}, stored_at=100.0, ttl_s=50)
        assert entry.expires_at == 150.0
        assert entry.is_expired(149.9) is False
        assert entry.is_expired(150.0) is True

    def test_zero_ttl_never_expires(self):
        entry = CacheEntry(key="k", payload=[], stored_at=100.0, ttl_s=0)
        assert entry.expires_at is None
        assert entry.is_expired(1e12) is False

    def test_json_roundtrip_keeps_payload(self):
        entry = CacheEntry(key="k", payload={"nodes": [{"name": "A"}]}, stored_at=1.0, ttl_s=10)
        restored = CacheEntry.model_validate_json(entry.model_dump_json())
        assert restored == entry
