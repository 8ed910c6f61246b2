"""Intermediate representation dataclasses for a conversion request.

WHY: The pipeline passes text through several stages (tokenize, look up,
fall back, reassemble). Each stage needs a well-typed view of the same
fragments so that nothing is lost or reordered between them, and so tests
can see which source produced every piece of output.

HOW: Enums classify tokens, harmony and resolution source. Frozen
dataclasses hold the fragments:
  Token            one word, whitespace run, or punctuation run
  CandidateWord    a word token plus its case-folded lookup key
  OutputSegment    the rendered text for one token and where it came from
  ConversionResult  all segments of one request, in input order

RULES:
- Tokens are immutable; joined token texts equal the original input
- Every input token yields exactly one OutputSegment
- All entities are transient and recomputed for every conversion request
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List

DictionaryMapping = Dict[str, str]
"""Case-folded word → curated script form. Absent keys mean "use fallback"."""


class TokenKind(str, enum.Enum):
    """Classification of a token produced by the tokenizer."""

    WORD = "word"
    WHITESPACE = "whitespace"
    PUNCTUATION = "punctuation"


class HarmonyClass(str, enum.Enum):
    """Vowel-harmony class of a word.

    RULES:
    - back: the word contains any of a, ı, o, u
    - front: everything else (including words with no vowels at all)
    """

    BACK = "back"
    FRONT = "front"


class ResolutionSource(str, enum.Enum):
    """Where the output text for a token came from."""

    DICTIONARY_HIT = "dictionary_hit"
    FALLBACK = "fallback"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class Token:
    """A classified fragment of the input text."""

    text: str
    kind: TokenKind

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD


@dataclass(frozen=True)
class CandidateWord:
    """A word token paired with its Turkish-aware case-folded lookup key."""

    token: Token
    key: str


@dataclass(frozen=True)
class OutputSegment:
    """The rendered form of a single input token.

    RULES:
    - token: the input token this segment renders
    - text: the output text emitted for it
    - source: dictionary_hit, fallback, or passthrough
    """

    token: Token
    text: str
    source: ResolutionSource


@dataclass
class ConversionResult:
    """The complete output of one conversion request.

    WHY: The final string is all most callers need, but the per-token
    segments make precedence and passthrough behaviour observable for
    tests and debugging.

    RULES:
    - segments are in input token order
    - lookup_failed is True when the dictionary could not be consulted
      and every word was rendered by the fallback
    """

    segments: List[OutputSegment] = field(default_factory=list)
    lookup_failed: bool = False

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    def count(self, source: ResolutionSource) -> int:
        """Number of segments resolved by the given source."""
        return sum(1 for segment in self.segments if segment.source is source)
