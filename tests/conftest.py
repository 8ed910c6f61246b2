"""Shared test fixtures for the ottoman_converter test suite.

WHY: Several test modules need the same worked examples, a controllable
dictionary, and a fake clock. Centralizing them here avoids duplication
and keeps the expected Ottoman spellings in one place.

HOW: Plain helper classes (fake scheduler, gated dictionary, failing
dictionary) plus pytest fixtures that instantiate them.

RULES:
- No test touches the network or a real timer unless it says so
- Expected spellings follow the documented letter table and harmony rule
- ControlledDictionary lookups block until the test releases them, so
  tests decide the order in which responses arrive
"""

import asyncio
from typing import Callable, Dict, List, Optional

import pytest

from ottoman_converter.api.base import DictionaryLookup, LookupUnavailableError


# ---------------------------------------------------------------------------
# Worked examples
# ---------------------------------------------------------------------------

FALLBACK_EXAMPLES = {
    "ev": "هو",
    "kapı": "قاپى",
    "ana": "آنا",
    "kitap": "قيطاپ",
    "kedi": "كهدي",
    "a": "آ",
    "": "",
}

CURATED = {
    "kitap": "كتاب",
    "kalem": "قلم",
    "ev": "او",
}


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeTimer:
    """Handle returned by FakeScheduler.call_later."""

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock with the call_later() shape of an asyncio event loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        """Move the clock forward and run every timer that became due."""
        self.now += seconds
        due = [t for t in self.active if t.when <= self.now + 1e-9]
        for timer in due:
            self.timers.remove(timer)
            timer.callback()


class ControlledDictionary(DictionaryLookup):
    """Dictionary whose lookups wait until the test releases them."""

    def __init__(self, entries: Dict[str, str]) -> None:
        self.entries = dict(entries)
        self.calls: List[List[str]] = []
        self._gates: List[asyncio.Event] = []

    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        gate = asyncio.Event()
        self.calls.append(list(words))
        self._gates.append(gate)
        await gate.wait()
        return {w: self.entries[w] for w in words if w in self.entries}

    def release(self, index: int) -> None:
        self._gates[index].set()

    async def wait_for_calls(self, count: int) -> None:
        for _ in range(1000):
            if len(self.calls) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError("expected {} lookups, saw {}".format(count, len(self.calls)))


class RecordingDictionary(DictionaryLookup):
    """Answers immediately and records every request."""

    def __init__(self, entries: Dict[str, str]) -> None:
        self.entries = dict(entries)
        self.calls: List[List[str]] = []

    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        self.calls.append(list(words))
        return {w: self.entries[w] for w in words if w in self.entries}


class FailingDictionary(DictionaryLookup):
    """Raises the given exception on every lookup."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error or LookupUnavailableError("connection refused")
        self.calls = 0

    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        self.calls += 1
        raise self.error


class BrokenDictionary(DictionaryLookup):
    """Returns None instead of a mapping."""

    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        return None  # type: ignore[return-value]


class SlowDictionary(DictionaryLookup):
    """Never answers within any reasonable timeout."""

    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        await asyncio.sleep(10)
        return {}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()


@pytest.fixture
def curated():
    """Curated spellings keyed by case-folded word."""
    return dict(CURATED)


@pytest.fixture
def recording_dictionary():
    return RecordingDictionary(CURATED)
