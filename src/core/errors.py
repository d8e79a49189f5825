# src/core/errors.py — v1
"""Error taxonomy for metadata lookups.

Only ConfigurationError and PermissionDeniedError are meant to reach the
caller. Everything deriving from MetadataError is per-request and is
degraded to "no metadata" by the gateway.
"""

from __future__ import annotations

from embedlrmi.config.settings import ConfigurationError


class MetadataError(RuntimeError):
    """Base class for per-request metadata failures."""


class TransportError(MetadataError):
    """Connection failure, timeout or non-2xx response from the provider."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ParseError(MetadataError):
    """Provider response body is not valid JSON."""


class CacheUnavailableError(MetadataError):
    """The cache backend itself failed (I/O, database or network error)."""


class PermissionDeniedError(Exception):
    """Caller lacks the right to perform an admin action."""


# Selector tuple for grouped exception handling
DEGRADABLE_ERRORS = (TransportError, ParseError)

__all__ = [
    "ConfigurationError",
    "MetadataError",
    "TransportError",
    "ParseError",
    "CacheUnavailableError",
    "PermissionDeniedError",
    "DEGRADABLE_ERRORS",
]
