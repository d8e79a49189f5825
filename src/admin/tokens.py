# src/admin/tokens.py — v2
"""Edit tokens guarding state-changing admin actions.

A token is an HMAC-SHA256 of the session id under a server secret, so it
can be re-derived and checked without server-side storage.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

TOKEN_SUFFIX = "+\\"


class EditTokenSigner:
    """Issues and validates per-session edit tokens."""

    def __init__(self, secret: str | bytes | None = None) -> None:
        if not secret:
            secret = secrets.token_hex(32)
        self._secret = secret.encode("utf-8") if isinstance(secret, str) else secret

    def issue(self, session_id: str) -> str:
        digest = hmac.new(
            self._secret, session_id.encode("utf-8"), hashlib.sha256
        ).hexdigest()
        return digest + TOKEN_SUFFIX

    def validate(self, session_id: str, token: str | None) -> bool:
        """Constant-time comparison against the expected token."""
        if not token:
            return False
        expected = self.issue(session_id).encode("utf-8")
        return hmac.compare_digest(expected, token.encode("utf-8", "surrogatepass"))
