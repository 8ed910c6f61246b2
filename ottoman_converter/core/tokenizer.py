"""Lossless tokenization of free text and Turkish-aware case folding.

WHY: The converter must rewrite words while leaving spacing, line breaks,
and punctuation exactly as typed. Splitting the input into classified runs
lets later stages touch only the word runs and rebuild everything else
verbatim.

HOW: One regex with three alternatives (whitespace runs, punctuation
runs, and everything else) is applied with finditer. The alternatives
cover every possible character, so consecutive matches tile the input
with no gaps.

RULES:
- Punctuation set: . , ? ! : ; ( )
- Whitespace is any Unicode whitespace (\\s)
- Everything else (letters, digits, apostrophes, Arabic script) is a word
- Joined token texts always equal the input
- Case folding maps I → ı and İ → i before lowercasing
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, List

from ottoman_converter.core.ir import CandidateWord, Token, TokenKind

PUNCTUATION_CHARS = ".,?!:;()"

_TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<punctuation>[.,?!:;()]+)"
    r"|(?P<word>[^\s.,?!:;()]+)"
)

# Python's default lowercasing is locale-blind: "I" → "i" and "İ" → "i̇".
_TURKISH_UPPER = str.maketrans({"I": "ı", "İ": "i"})


def fold_case(word: str) -> str:
    """Lowercase a word using Turkish casing rules.

    RULES:
    - "I" folds to dotless "ı", "İ" folds to dotted "i"
    - Input is NFC-normalized first, so a decomposed "I" + U+0307 is "İ"
    - All other characters use str.lower()
    """
    return unicodedata.normalize("NFC", word).translate(_TURKISH_UPPER).lower()


def tokenize(text: str) -> List[Token]:
    """Split text into an ordered list of word, whitespace and punctuation tokens.

    Args:
        text: Arbitrary input text. May be empty.

    Returns:
        Tokens whose texts, joined in order, reproduce ``text`` exactly.
        Empty input yields an empty list.
    """
    tokens: List[Token] = []
    for match in _TOKEN_RE.finditer(text):
        kind = TokenKind(match.lastgroup)
        tokens.append(Token(text=match.group(), kind=kind))
    return tokens


def candidate_words(tokens: Iterable[Token]) -> List[CandidateWord]:
    """Pair every word token with its case-folded lookup key."""
    return [
        CandidateWord(token=token, key=fold_case(token.text))
        for token in tokens
        if token.is_word
    ]


def distinct_lookup_keys(tokens: Iterable[Token]) -> List[str]:
    """Return the distinct case-folded word keys in first-occurrence order.

    WHY: A conversion request issues exactly one batch lookup. Sending each
    key once keeps the payload small no matter how often a word repeats.
    """
    seen: set = set()
    keys: List[str] = []
    for candidate in candidate_words(tokens):
        if candidate.key not in seen:
            seen.add(candidate.key)
            keys.append(candidate.key)
    return keys
