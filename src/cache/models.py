# src/cache/models.py — v2
"""Cache domain models: CacheEntry.

An entry pairs a cache key with the decoded provider payload and the TTL
the gateway assigned when it was written.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Single cache entry holding one provider payload."""

    key: str
    payload: Any = None
    stored_at: float
    ttl_s: int = 0

    @property
    def expires_at(self) -> float | None:
        """Epoch seconds after which the entry is stale (None = never)."""
        if self.ttl_s <= 0:
            return None
        return self.stored_at + self.ttl_s

    def is_expired(self, now: float) -> bool:
        expires_at = self.expires_at
        return expires_at is not None and now >= expires_at
