# src/logging/context.py — v3
"""Per-request log context: which page, cache key and host action a record belongs to.

The context is one immutable LogContext held in a ContextVar, so each asyncio
task sees the values set along its own call chain. ContextFilter copies the
current values onto every LogRecord passing through a handler.
"""

from __future__ import annotations

import contextvars
import logging
from dataclasses import asdict, dataclass, replace

CONTEXT_FIELDS = ("page_url", "cache_key", "action")


@dataclass(frozen=True)
class LogContext:
    page_url: str | None = None
    cache_key: str | None = None
    action: str | None = None

    def as_dict(self) -> dict[str, str]:
        """Only the fields that are set."""
        return {k: v for k, v in asdict(self).items() if v is not None}


_current: contextvars.ContextVar[LogContext] = contextvars.ContextVar(
    "embedlrmi_log_context", default=LogContext()
)


def get_context() -> LogContext:
    return _current.get()


def set_lookup_context(page_url: str, cache_key: str | None = None) -> None:
    """Record the canonical URL (and its cache key) being looked up."""
    _current.set(replace(_current.get(), page_url=page_url, cache_key=cache_key))


def set_action_context(action: str | None) -> None:
    """Record the host action being served: view, lrmi, save or purge."""
    _current.set(replace(_current.get(), action=action))


def clear_context() -> None:
    _current.set(LogContext())


class ContextFilter(logging.Filter):
    """Stamp page_url / cache_key / action onto each record.

    Values passed explicitly through ``extra=`` are left alone.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _current.get()
        for name in CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, getattr(ctx, name))
        return True
