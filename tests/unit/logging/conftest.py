# tests/unit/logging/conftest.py — v1
"""Restore the embedlrmi logger after tests that reconfigure it."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_embedlrmi_logger():
    root = logging.getLogger("embedlrmi")
    level, handlers = root.level, list(root.handlers)
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
