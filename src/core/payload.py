# src/core/payload.py — v1
"""Helpers for provider payloads.

The provider answers with {"nodes": [...]}; only nodes[0] is ever consumed.
No schema is enforced beyond that.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

MetadataPayload = Any


def first_node(payload: MetadataPayload) -> Any | None:
    """Return payload["nodes"][0], or None when there is no usable node."""
    if not isinstance(payload, Mapping):
        return None
    nodes = payload.get("nodes")
    if not isinstance(nodes, list) or not nodes:
        return None
    return nodes[0]


def has_metadata(payload: MetadataPayload) -> bool:
    return first_node(payload) is not None
