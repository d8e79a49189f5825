# tests/conftest.py — v2
"""Shared test fixtures for unit and integration tests.

Provides a controllable clock, a scripted metadata provider and an
in-memory gateway. No network access — HTTP is stubbed with
httpx.MockTransport where the real provider is exercised.
"""

from __future__ import annotations

import pytest

from embedlrmi.cache.memory_store import MemoryCacheStore
from embedlrmi.gateway.metadata_gateway import MetadataCacheGateway
from embedlrmi.logging.context import clear_context
from support import FakeClock, StubProvider


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def gateway(memory_store: MemoryCacheStore, stub_provider: StubProvider) -> MetadataCacheGateway:
    return MetadataCacheGateway(store=memory_store, provider=stub_provider, ttl_s=3600)
