# tests/unit/admin/test_tokens.py — v1
"""Tests for admin/tokens.py."""

from __future__ import annotations

from embedlrmi.admin.tokens import EditTokenSigner


class TestEditTokenSigner:
    def test_issue_and_validate(self):
        signer = EditTokenSigner("secret")
        token = signer.issue("session-1")
        assert signer.validate("session-1", token) is True

    def test_deterministic_for_same_secret(self):
        assert EditTokenSigner("s").issue("a") == EditTokenSigner("s").issue("a")

    def test_other_session_rejected(self):
        signer = EditTokenSigner("secret")
        assert signer.validate("session-2", signer.issue("session-1")) is False

    def test_other_secret_rejected(self):
        token = EditTokenSigner("one").issue("session-1")
        assert EditTokenSigner("two").validate("session-1", token) is False

    def test_missing_token_rejected(self):
        signer = EditTokenSigner("secret")
        assert signer.validate("session-1", None) is False
        assert signer.validate("session-1", "") is False

    def test_random_secret_when_empty(self):
        a, b = EditTokenSigner(), EditTokenSigner("")
        assert a.issue("s") != b.issue("s")

    def test_non_ascii_token_rejected(self):
        signer = EditTokenSigner("secret")
        assert signer.validate("session-1", "é") is False
        assert signer.validate("session-1", signer.issue("session-1") + "ü") is False
        assert signer.validate("session-1", "\ud800") is False
