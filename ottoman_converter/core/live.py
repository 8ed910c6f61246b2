"""Debounced, last-request-wins conversion for continuously edited text.

WHY: While a user types, every keystroke produces a new input snapshot.
Looking up each one would flood the dictionary, and a slow response for
an old snapshot could overwrite the output of a newer one. Live sessions
wait for a quiet period before looking up, and throw away any result
that no longer matches the latest input.

HOW: Each update() bumps a generation counter, cancels the pending timer,
and schedules a new one through an injectable scheduler. When the timer
fires, a conversion task is spawned for that generation's snapshot. After
its lookup resolves, the result is delivered only if the task's
generation is still the latest; otherwise it is dropped.

RULES:
- A scheduler is anything with call_later(delay, callback) → handle.cancel()
  (asyncio event loops qualify; tests inject a fake clock)
- Each update resets the debounce wait
- Empty input cancels pending work and delivers an empty result at once
- Stale results are dropped silently (debug log only), never delivered
- Lookup failures are reported through on_error and still produce output
- Single-threaded: the generation check and the delivery run without
  an intervening await, so no lock is needed
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Optional, Set

from ottoman_converter.api.base import DictionaryLookup
from ottoman_converter.config import DEFAULT_OPTIONS, ConverterOptions
from ottoman_converter.core.converter import ErrorCallback, OttomanConverter
from ottoman_converter.core.ir import ConversionResult
from ottoman_converter.core.reassembler import resolve_tokens

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ConversionResult], None]


class LiveConverter:
    """Converts the latest of a stream of input snapshots.

    RULES:
    - on_result receives only results for the latest generation
    - on_error (optional) receives lookup failures for the latest generation
    - scheduler defaults to the running asyncio event loop
    """

    def __init__(
        self,
        dictionary: Optional[DictionaryLookup],
        on_result: ResultCallback,
        on_error: Optional[ErrorCallback] = None,
        options: Optional[ConverterOptions] = None,
        scheduler: Any = None,
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self._converter = OttomanConverter(dictionary, self.options)
        self._on_result = on_result
        self._on_error = on_error
        self._scheduler = scheduler
        self._generation = 0
        self._latest_text = ""
        self._pending: Any = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def generation(self) -> int:
        """The generation of the most recent input snapshot."""
        return self._generation

    @property
    def pending(self) -> bool:
        """True while a debounce timer is waiting to fire."""
        return self._pending is not None

    def update(self, text: str) -> int:
        """Register a new input snapshot and (re)start the debounce wait.

        Args:
            text: The full current input.

        Returns:
            The generation number assigned to this snapshot.
        """
        self._cancel_pending()
        self._generation += 1
        generation = self._generation
        self._latest_text = text

        if not text:
            self._on_result(ConversionResult())
            return generation

        scheduler = self._scheduler or asyncio.get_running_loop()
        self._pending = scheduler.call_later(
            self.options.debounce_s,
            lambda: self._fire(generation, text),
        )
        return generation

    def cancel(self) -> None:
        """Drop the pending timer and invalidate every in-flight lookup."""
        self._cancel_pending()
        self._generation += 1

    def flush(self) -> None:
        """Fire the pending debounce timer immediately, if there is one."""
        if self._pending is None:
            return
        self._cancel_pending()
        self._fire(self._generation, self._latest_text)

    async def drain(self) -> None:
        """Wait until every spawned conversion task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, generation: int, text: str) -> None:
        """Debounce timer callback: start the conversion for one snapshot."""
        self._pending = None
        task = asyncio.ensure_future(self.run(generation, text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def run(self, generation: int, text: str) -> Optional[ConversionResult]:
        """Convert one snapshot and deliver it if it is still the latest.

        WHY: The lookup is the only suspension point. By the time it
        resolves, newer input may exist; applying the old mapping would
        show output for text the user no longer has.

        Returns:
            The delivered ConversionResult, or None if the snapshot went stale.
        """
        tokens, mapping, error = await self._converter.lookup(text)

        if not self.is_current(generation):
            logger.debug(
                "Dropping stale result for generation %d (latest is %d)",
                generation,
                self._generation,
            )
            return None

        result = resolve_tokens(tokens, mapping, self.options)
        if error is not None:
            result.lookup_failed = True
            if self._on_error:
                self._on_error(error)
        self._on_result(result)
        return result
