"""Ottoman Converter: Latin-alphabet Turkish to Ottoman script transliteration.

WHY: Readers and writers of historical Ottoman-Turkish material type in the
modern Latin alphabet but need the Arabic-script form. A curated dictionary
covers common words exactly; everything else needs a predictable phonetic
rendering so that no input is ever left unconverted.

HOW: Four-stage pipeline: tokenize (lossless word/whitespace/punctuation
split), look up (one batched dictionary request per conversion), fall back
(vowel-harmony letter table for dictionary misses), reassemble (dictionary
wins, everything else passes through). Each stage is independently testable.

RULES:
- Tokenization is lossless: joined token texts equal the input exactly
- A dictionary hit always beats the fallback rendering
- Dictionary failures degrade to full fallback, never to an error
- Live conversions are last-request-wins: stale lookups are never delivered
"""

__version__ = "0.1.0"
