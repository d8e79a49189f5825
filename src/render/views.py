# src/render/views.py — v1
"""HTML fragments for the LRMI view and the purge admin page."""

from __future__ import annotations

from html import escape

from embedlrmi.core.payload import MetadataPayload, first_node
from embedlrmi.render.messages import msg
from embedlrmi.render.tree import render_tree


def render_lrmi_view(payload: MetadataPayload | None) -> str:
    """Human-readable view of nodes[0], or a "no metadata" notice."""
    node = first_node(payload)
    if node is None:
        body = f"<p>{escape(msg('embedlrmi-no-lrmi-data'))}</p>"
    else:
        body = render_tree(node)
    return f'<div class="lrmi-data-container">{body}</div>'


def render_purge_form(action_url: str, token: str) -> str:
    """POST form with a hidden action field and edit token."""
    return "".join([
        '<div class="lrmi-purge-form">',
        f"<p>{escape(msg('embedlrmi-purge-cache-description'))}</p>",
        f'<form method="post" action="{escape(action_url)}">',
        '<input type="hidden" name="action" value="purge">',
        f'<input type="hidden" name="token" value="{escape(token)}">',
        '<input type="submit" name="submit" class="mw-ui-button mw-ui-progressive" '
        f'value="{escape(msg("embedlrmi-purge-cache-button"))}">',
        "</form>",
        "</div>",
    ])


def success_box(text: str) -> str:
    return f'<div class="successbox">{escape(text)}</div>'


def error_box(text: str) -> str:
    return f'<div class="errorbox">{escape(text)}</div>'
