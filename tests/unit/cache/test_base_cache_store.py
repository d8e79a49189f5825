# tests/unit/cache/test_base_cache_store.py — v2
"""Tests for cache/base_cache_store.py — BaseCacheStore ABC."""

from __future__ import annotations

import pytest

from embedlrmi.cache.base_cache_store import BaseCacheStore
from embedlrmi.cache.memory_store import MemoryCacheStore


class TestBaseCacheStore:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseCacheStore()  # type: ignore[abstract]

    def test_has_required_methods(self):
        for method in ["get", "set", "delete", "keys", "make_key", "close"]:
            assert hasattr(BaseCacheStore, method)

    def test_make_key(self):
        assert MemoryCacheStore().make_key("embedlrmi", "abc") == "embedlrmi:abc"
