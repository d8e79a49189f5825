# src/cache/keys.py — v1
"""Cache key derivation.

Keys depend only on the namespace and the canonical URL, never on
in-process state, so invalidation works without a prior fetch.
"""

from __future__ import annotations

import hashlib

DEFAULT_NAMESPACE = "embedlrmi"
KEY_SEPARATOR = ":"


def url_fingerprint(canonical_url: str) -> str:
    """SHA-256 hex digest of the canonical URL."""
    return hashlib.sha256(canonical_url.encode("utf-8")).hexdigest()


def make_key(namespace: str, fragment: str) -> str:
    """Join a namespace and a raw fragment into a cache key."""
    return f"{namespace}{KEY_SEPARATOR}{fragment}"


def namespace_prefix(namespace: str) -> str:
    return f"{namespace}{KEY_SEPARATOR}"
