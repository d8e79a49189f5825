# tests/unit/provider/test_http_provider.py — v1
"""Tests for provider/http_provider.py — httpx.MockTransport stubs the API."""

from __future__ import annotations

import json

import httpx
import pytest

from embedlrmi.core.errors import ParseError, TransportError
from embedlrmi.provider.http_provider import HttpMetadataProvider, build_criteria

ENDPOINT = "https://repo.example.org/rest/search"
URL = "https://example.org/wiki/Foo"


def _provider(handler) -> HttpMetadataProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpMetadataProvider(endpoint=ENDPOINT, timeout_s=2.0, client=client)


class TestBuildCriteria:
    def test_shape(self):
        assert build_criteria(URL) == {
            "criteria": [{"property": "ccm:wwwurl", "values": [URL]}]
        }


class TestHttpMetadataProvider:
    def test_rejects_empty_endpoint(self):
        with pytest.raises(ValueError, match="endpoint"):
            HttpMetadataProvider(endpoint="")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError, match="timeout_s"):
            HttpMetadataProvider(endpoint=ENDPOINT, timeout_s=0)

    @pytest.mark.asyncio
    async def test_posts_criteria(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"nodes": [{"name": "Foo Lesson"}]})

        data = await _provider(handler).fetch(URL)

        assert data == {"nodes": [{"name": "Foo Lesson"}]}
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == ENDPOINT
        assert request.headers["content-type"] == "application/json"
        assert request.headers["accept"] == "application/json"
        assert json.loads(request.content) == build_criteria(URL)

    @pytest.mark.asyncio
    async def test_payload_without_nodes_is_returned(self):
        data = await _provider(lambda r: httpx.Response(200, json={"total": 0})).fetch(URL)
        assert data == {"total": 0}

    @pytest.mark.asyncio
    async def test_server_error(self):
        provider = _provider(lambda r: httpx.Response(500, text="boom"))
        with pytest.raises(TransportError, match="HTTP 500") as exc_info:
            await provider.fetch(URL)
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_not_found(self):
        provider = _provider(lambda r: httpx.Response(404))
        with pytest.raises(TransportError):
            await provider.fetch(URL)

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        provider = _provider(lambda r: httpx.Response(200, text="<html>nope</html>"))
        with pytest.raises(ParseError):
            await provider.fetch(URL)

    @pytest.mark.asyncio
    async def test_empty_body(self):
        provider = _provider(lambda r: httpx.Response(200, content=b""))
        with pytest.raises(ParseError):
            await provider.fetch(URL)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="failed"):
            await _provider(handler).fetch(URL)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError, match="Timeout"):
            await _provider(handler).fetch(URL)

    def test_provider_name(self):
        assert HttpMetadataProvider(endpoint=ENDPOINT).provider_name == "http"
