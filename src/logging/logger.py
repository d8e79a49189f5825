# src/logging/logger.py — v3
"""Formatters and setup for the ``embedlrmi`` logger tree.

Modules log through ``logging.getLogger(__name__)``; everything under
``embedlrmi`` goes to stderr (stdout carries CLI output) and optionally to
a rotating file. JSON lines look like::

    {"ts": "...", "level": "WARNING", "logger": "embedlrmi.gateway.metadata_gateway",
     "msg": "LRMI lookup failed ...", "page_url": "https://...", "cache_key": "embedlrmi:...",
     "action": "view"}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from embedlrmi.logging.context import CONTEXT_FIELDS, ContextFilter, get_context

ROOT_LOGGER = "embedlrmi"
_NOISY_LIBRARIES = ("httpx", "httpcore")


def _context_of(record: logging.LogRecord) -> dict[str, str]:
    # Records that skipped ContextFilter (e.g. built by hand) use the live context
    if not any(hasattr(record, name) for name in CONTEXT_FIELDS):
        return get_context().as_dict()
    values = {name: getattr(record, name, None) for name in CONTEXT_FIELDS}
    return {name: value for name, value in values.items() if value is not None}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, lookup context as top-level fields."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **_context_of(record),
        }
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """``2026-01-01 12:00:00 WARNING  embedlrmi.x: message [view] (https://...)``"""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-8s %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        ctx = _context_of(record)
        if "action" in ctx:
            text += f" [{ctx['action']}]"
        if "page_url" in ctx:
            text += f" ({ctx['page_url']})"
        return text


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> None:
    """(Re)configure the embedlrmi logger; safe to call more than once."""
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level.upper())
    formatter = JsonFormatter() if log_format == "json" else TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        from embedlrmi.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation, retention))

    for old in root.handlers:
        old.close()
    root.handlers.clear()

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(ContextFilter())
        root.addHandler(handler)

    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
