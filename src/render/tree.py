# src/render/tree.py — v1
"""Render an arbitrary JSON value as a nested HTML list.

Mappings and lists recurse; list items use their index as key. Keys and
scalar leaves are HTML-escaped. Input is assumed to be a finite tree.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from html import escape
from typing import Any


def render_tree(data: Any) -> str:
    """Render data as <div><ul><li><b>key</b>: value</li>...</ul></div>.

    A JSON string is decoded first; a scalar at the top level renders as a
    single escaped text item.
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except ValueError:
            return _render_scalar(data if isinstance(data, str) else data.decode("utf-8", "replace"))

    if not isinstance(data, (Mapping, list, tuple)):
        return _render_scalar(data)

    parts = ["<div><ul>"]
    for key, value in _items(data):
        parts.append(f"<li><b>{escape(str(key))}</b>: ")
        if isinstance(value, (Mapping, list, tuple)):
            parts.append(render_tree(value))
        else:
            parts.append(_render_scalar(value))
        parts.append("</li>")
    parts.append("</ul></div>")
    return "".join(parts)


def _items(data: Mapping[Any, Any] | list[Any] | tuple[Any, ...]):
    if isinstance(data, Mapping):
        return data.items()
    return enumerate(data)


def _render_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return escape(str(value))
