# src/core/identity.py — v1
"""Identity resolver: raw page URL → canonical URL.

Applies an ordered list of literal (from, to) substring replacements.
Each rule sees the output of the previous one. No URL parsing is done;
malformed input passes through untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

RewriteRule = tuple[str, str]


def resolve(raw_url: str, rules: Iterable[RewriteRule] = ()) -> str:
    """Return the canonical form of raw_url under the given rewrite rules."""
    url = raw_url
    for src, dst in rules:
        if src:
            url = url.replace(src, dst)
    return url


class IdentityResolver:
    """Resolver bound to a fixed rule list."""

    def __init__(self, rules: Sequence[RewriteRule] = ()) -> None:
        self._rules: tuple[RewriteRule, ...] = tuple(
            (str(src), str(dst)) for src, dst in rules
        )

    @property
    def rules(self) -> tuple[RewriteRule, ...]:
        return self._rules

    def resolve(self, raw_url: str) -> str:
        return resolve(raw_url, self._rules)

    def __repr__(self) -> str:
        return f"IdentityResolver(rules={len(self._rules)})"
