# src/provider/http_provider.py — v1
"""HTTP metadata provider for the repository search API.

Sends one POST per lookup, with a mandatory client-side timeout:

    {"criteria": [{"property": "ccm:wwwurl", "values": ["<canonical url>"]}]}

No retries. Failures are raised as TransportError / ParseError and
degraded by the gateway.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from embedlrmi.core.errors import ParseError, TransportError
from embedlrmi.provider.base_provider import BaseMetadataProvider

logger = logging.getLogger(__name__)

WWWURL_PROPERTY = "ccm:wwwurl"

_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def build_criteria(canonical_url: str) -> dict[str, Any]:
    """Search body matching repository nodes by their www URL."""
    return {"criteria": [{"property": WWWURL_PROPERTY, "values": [canonical_url]}]}


class HttpMetadataProvider(BaseMetadataProvider):
    """Repository API client over httpx."""

    def __init__(
        self,
        endpoint: str,
        timeout_s: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not endpoint:
            raise ValueError("endpoint must not be empty")
        if timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        self._endpoint = endpoint
        self._timeout = httpx.Timeout(timeout_s)
        self._client = client

    @property
    def provider_name(self) -> str:
        return "http"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def fetch(self, canonical_url: str) -> Any:
        body = build_criteria(canonical_url)
        logger.debug("POST %s for %s", self._endpoint, canonical_url)

        t0 = time.monotonic()
        try:
            if self._client is not None:
                resp = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await self._post(client, body)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timeout calling {self._endpoint}: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {self._endpoint} failed: {e}") from e
        latency = int((time.monotonic() - t0) * 1000)

        if not resp.is_success:
            raise TransportError(
                f"HTTP {resp.status_code} from {self._endpoint}: {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Invalid JSON from {self._endpoint}: {e}") from e

        logger.debug("Provider answered in %d ms for %s", latency, canonical_url)
        return data

    async def _post(self, client: httpx.AsyncClient, body: dict[str, Any]) -> httpx.Response:
        return await client.post(
            self._endpoint, json=body, headers=_HEADERS, timeout=self._timeout,
        )
