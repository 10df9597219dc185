"""Shared fixtures for versefill tests."""
import asyncio

import pytest

from versefill.config import Config
from versefill.core.grammar import normalize_key
from versefill.core.models import ResolutionResult
from versefill.exceptions import NotFoundError
from versefill.providers import BaseResolver, CallbackNotifier
from versefill.utils.rate_limiter import reset_rate_limits

JOHN_3_16 = "For God so loved..."
ROMANS_8_28 = "And we know that all things work together for good..."


class FakeResolver(BaseResolver):
    """Synchronous resolver over a dict, recording every call."""

    name = "fake"

    def __init__(self, verses=None, failures=None):
        super().__init__(Config(enable_rate_limiting=False))
        self.verses = dict(verses or {})
        self.failures = dict(failures or {})
        self.calls = []

    def resolve(self, citation_text):
        self.calls.append(citation_text)
        if citation_text in self.failures:
            raise self.failures[citation_text]
        if citation_text not in self.verses:
            raise NotFoundError(f"Verse not found: {citation_text}", reference=citation_text)
        return ResolutionResult(normalize_key(citation_text), None, self.verses[citation_text])


class GatedResolver(BaseResolver):
    """Coroutine resolver whose lookups only finish once released."""

    name = "gated"

    def __init__(self, verses=None):
        super().__init__(Config(enable_rate_limiting=False))
        self.verses = dict(verses or {})
        self.calls = []
        self.active = 0
        self.max_active = 0
        self._gates = {}

    def gate(self, citation_text):
        if citation_text not in self._gates:
            self._gates[citation_text] = asyncio.Event()
        return self._gates[citation_text]

    def release(self, citation_text):
        self.gate(citation_text).set()

    async def resolve(self, citation_text):
        self.calls.append(citation_text)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await self.gate(citation_text).wait()
        finally:
            self.active -= 1

        if citation_text not in self.verses:
            raise NotFoundError(f"Verse not found: {citation_text}", reference=citation_text)
        return ResolutionResult(normalize_key(citation_text), None, self.verses[citation_text])


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def verses():
    return {"John 3:16": JOHN_3_16, "Romans 8:28": ROMANS_8_28}


@pytest.fixture
def fake_resolver(verses):
    return FakeResolver(verses)


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def notifier(notifications):
    return CallbackNotifier(lambda kind, message: notifications.append((kind, message)))
