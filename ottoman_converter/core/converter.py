"""One-shot conversion pipeline: tokenize, look up once, reassemble.

WHY: Every surface (CLI, HTTP API, live session) runs the same sequence
for a single input snapshot. Centralizing it keeps the "one batch lookup
per request" and "failure means full fallback" rules in one place.

HOW: The input is tokenized, its distinct case-folded words are sent to
the dictionary in a single batch_lookup bounded by a timeout, and the
tokens are resolved against whatever mapping came back. Any lookup
failure is logged, reported through an optional callback, and replaced
with an empty mapping.

RULES:
- At most one batch_lookup per conversion; none for input without words
- No dictionary configured → fallback-only, not a failure
- Lookup failure or timeout → empty mapping, lookup_failed=True
- The mapping fetched for a snapshot is applied only to that snapshot
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import List, Mapping, Optional, Tuple

from ottoman_converter.api.base import DictionaryLookup, LookupUnavailableError
from ottoman_converter.config import DEFAULT_OPTIONS, ConverterOptions
from ottoman_converter.core.ir import ConversionResult, DictionaryMapping
from ottoman_converter.core.reassembler import resolve_tokens
from ottoman_converter.core.tokenizer import distinct_lookup_keys, tokenize

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[LookupUnavailableError], None]


async def fetch_mapping(
    dictionary: Optional[DictionaryLookup],
    words: List[str],
    timeout_s: float,
) -> Tuple[DictionaryMapping, Optional[LookupUnavailableError]]:
    """Run one bounded batch lookup, converting every failure to an empty mapping.

    WHY: A slow or broken dictionary must never hold up output. Callers
    still need to know a failure happened so they can surface it.

    HOW: Awaits ``dictionary.batch_lookup`` under ``asyncio.wait_for``.
    Timeouts and exceptions raised by the lookup are wrapped in
    LookupUnavailableError and returned alongside an empty mapping.

    Args:
        dictionary: The lookup source, or None for fallback-only conversion.
        words: Distinct case-folded words of one request.
        timeout_s: Upper bound on the lookup.

    Returns:
        Tuple of (mapping, error). error is None on success.
    """
    if dictionary is None or not words:
        return {}, None

    try:
        mapping = await asyncio.wait_for(dictionary.batch_lookup(words), timeout=timeout_s)
        mapping = dict(mapping)
    except asyncio.TimeoutError:
        error = LookupUnavailableError(
            "Dictionary lookup timed out after {:.1f}s".format(timeout_s)
        )
    except LookupUnavailableError as exc:
        error = exc
    except Exception as exc:  # noqa: BLE001
        error = LookupUnavailableError("Dictionary lookup failed: {}".format(exc))
        error.__cause__ = exc
    else:
        return mapping, None

    logger.warning("Dictionary lookup unavailable, using fallback for %d words: %s", len(words), error)
    return {}, error


def convert_offline(
    text: str,
    mapping: Optional[Mapping[str, str]] = None,
    options: Optional[ConverterOptions] = None,
) -> ConversionResult:
    """Convert text synchronously against an already-known mapping.

    Args:
        text: Input text.
        mapping: Case-folded word → script overrides (default: none).
        options: Conversion options.

    Returns:
        ConversionResult for the text.
    """
    return resolve_tokens(tokenize(text), mapping or {}, options)


class OttomanConverter:
    """Converts one input snapshot at a time against a dictionary.

    RULES:
    - dictionary=None means fallback-only conversion
    - options defaults to DEFAULT_OPTIONS from config
    - convert() never raises for lookup failures
    """

    def __init__(
        self,
        dictionary: Optional[DictionaryLookup] = None,
        options: Optional[ConverterOptions] = None,
    ) -> None:
        self.dictionary = dictionary
        self.options = options or DEFAULT_OPTIONS

    async def lookup(
        self,
        text: str,
    ) -> Tuple[list, DictionaryMapping, Optional[LookupUnavailableError]]:
        """Tokenize text and fetch its dictionary mapping.

        Returns:
            Tuple of (tokens, mapping, error) for this exact snapshot.
        """
        tokens = tokenize(text)
        words = distinct_lookup_keys(tokens)
        mapping, error = await fetch_mapping(self.dictionary, words, self.options.lookup_timeout_s)
        return tokens, mapping, error

    async def convert(
        self,
        text: str,
        on_error: Optional[ErrorCallback] = None,
    ) -> ConversionResult:
        """Convert a full input snapshot.

        Args:
            text: Input text.
            on_error: Called with the LookupUnavailableError when the
                dictionary could not be consulted.

        Returns:
            ConversionResult; lookup_failed is set when fallback was forced.
        """
        tokens, mapping, error = await self.lookup(text)
        result = resolve_tokens(tokens, mapping, self.options)
        if error is not None:
            result.lookup_failed = True
            if on_error:
                on_error(error)
        return result
