"""Token resolution and output reassembly.

WHY: Two sources of truth compete for every word: the curated dictionary
and the generated fallback. This module is the single place where the
precedence rule lives, and where non-word tokens are stitched back in so
the output keeps the exact shape of the input.

HOW: Walk the token list once. Whitespace and punctuation become
passthrough segments. Each word is case-folded; a key present in the
mapping yields its curated value verbatim, otherwise the fallback
rendering is used. Segments are concatenated in token order.

RULES:
- Dictionary always wins, even when the fallback would differ
- A key that is present with an empty value still counts as a hit
- Non-word tokens are never looked up or transliterated
- ottoman_punctuation rewrites only "," and "?" inside punctuation runs
- Synchronous and pure: no I/O, no shared state
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ottoman_converter.config import DEFAULT_OPTIONS, ConverterOptions
from ottoman_converter.core.fallback import fallback
from ottoman_converter.core.ir import (
    ConversionResult,
    OutputSegment,
    ResolutionSource,
    Token,
)
from ottoman_converter.core.tokenizer import fold_case

_OTTOMAN_PUNCTUATION = str.maketrans({",": "،", "?": "؟"})


def resolve_token(
    token: Token,
    mapping: Mapping[str, str],
    options: ConverterOptions = DEFAULT_OPTIONS,
) -> OutputSegment:
    """Render one token, recording which source produced the text."""
    if not token.is_word:
        text = token.text
        if options.ottoman_punctuation:
            text = text.translate(_OTTOMAN_PUNCTUATION)
        return OutputSegment(token=token, text=text, source=ResolutionSource.PASSTHROUGH)

    key = fold_case(token.text)
    if key in mapping:
        return OutputSegment(
            token=token,
            text=mapping[key],
            source=ResolutionSource.DICTIONARY_HIT,
        )
    return OutputSegment(
        token=token,
        text=fallback(token.text, options),
        source=ResolutionSource.FALLBACK,
    )


def resolve_tokens(
    tokens: Iterable[Token],
    mapping: Mapping[str, str],
    options: Optional[ConverterOptions] = None,
) -> ConversionResult:
    """Resolve every token against the mapping.

    Args:
        tokens: Tokenizer output for one input snapshot.
        mapping: Case-folded word → script form for that same snapshot.
        options: Conversion options (punctuation and digit rendering).

    Returns:
        ConversionResult with one segment per token, in order.
    """
    options = options or DEFAULT_OPTIONS
    return ConversionResult(
        segments=[resolve_token(token, mapping, options) for token in tokens]
    )


def reassemble(tokens: Iterable[Token], mapping: Mapping[str, str]) -> str:
    """Return the converted string for a token list and dictionary mapping."""
    return resolve_tokens(tokens, mapping).text
