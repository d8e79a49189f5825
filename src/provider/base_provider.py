# src/provider/base_provider.py — v1
"""Abstract metadata provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseMetadataProvider(ABC):
    """Looks up LRMI metadata for a canonical URL in an external repository."""

    @abstractmethod
    async def fetch(self, canonical_url: str) -> Any:
        """Return the decoded provider response.

        Raises:
            TransportError: Connection failure, timeout or non-2xx status.
            ParseError: Response body is not valid JSON.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier used in logs."""
