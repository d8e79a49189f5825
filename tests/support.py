# tests/support.py — v1
"""Test doubles shared across unit and integration tests."""

from __future__ import annotations

import asyncio
from typing import Any

from embedlrmi.provider.base_provider import BaseMetadataProvider

FOO_PAYLOAD = {"nodes": [{"name": "Foo Lesson", "@type": "LearningResource"}]}


class FakeClock:
    """Manually advanced epoch clock."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubProvider(BaseMetadataProvider):
    """Scripted provider that records every call.

    `result` is returned (or raised, if it is an exception). When `gate`
    is set, fetch() waits on it before answering.
    """

    def __init__(self, result: Any = None, gate: asyncio.Event | None = None) -> None:
        self.result = FOO_PAYLOAD if result is None else result
        self.gate = gate
        self.calls: list[str] = []

    @property
    def provider_name(self) -> str:
        return "stub"

    async def fetch(self, canonical_url: str) -> Any:
        self.calls.append(canonical_url)
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    @property
    def call_count(self) -> int:
        return len(self.calls)
