# src/render/jsonld.py — v1
"""JSON-LD script element for the page head."""

from __future__ import annotations

import json
from typing import Any

HEAD_ITEM_NAME = "EmbedLrmiData"

# Keep the payload from closing the <script> element or opening comments.
_SCRIPT_ESCAPES = str.maketrans({"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"})


def dump_jsonld(node: Any) -> str:
    """Serialize a node as script-safe JSON."""
    return json.dumps(node, ensure_ascii=False, separators=(",", ":")).translate(
        _SCRIPT_ESCAPES
    )


def jsonld_script(node: Any) -> str:
    """Wrap a metadata node in an application/ld+json script element."""
    return f'<script type="application/ld+json">{dump_jsonld(node)}</script>'
