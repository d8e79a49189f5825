# src/render/messages.py — v1
"""English message catalogue for user-facing strings."""

from __future__ import annotations

MESSAGES: dict[str, str] = {
    "embedlrmi-show-lrmi-data": "LRMI data",
    "embedlrmi-show-lrmi-link": "Show LRMI data",
    "embedlrmi-no-lrmi-data": "No LRMI metadata available for this page.",
    "embedlrmi-missing-config": "EmbedLRMI configuration error",
    "embedlrmi-purge-cache-title": "Purge LRMI cache",
    "embedlrmi-purge-cache-description": (
        "Remove all cached LRMI metadata. Pages will fetch fresh metadata "
        "from the repository on their next view."
    ),
    "embedlrmi-purge-cache-button": "Purge LRMI cache",
    "embedlrmi-purge-cache-success": "The LRMI cache has been purged ($1 entries removed).",
    "embedlrmi-purge-cache-failed": "The LRMI cache could not be purged.",
    "sessionfailure": (
        "There seems to be a problem with your login session; this action "
        "has been canceled as a precaution against session hijacking."
    ),
}


def msg(key: str, *params: object) -> str:
    """Look up a message, substituting $1, $2, ... with params.

    Unknown keys render as ⧼key⧽ so missing strings stay visible.
    """
    text = MESSAGES.get(key)
    if text is None:
        return f"⧼{key}⧽"
    for i, value in enumerate(params, start=1):
        text = text.replace(f"${i}", str(value))
    return text
