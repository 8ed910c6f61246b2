"""Deterministic vowel-harmony transliteration for dictionary misses.

WHY: The curated dictionary only covers a fraction of real input. Every
other word still needs an Ottoman-script rendering that is predictable,
instant, and independent of any external service. Turkish vowel harmony
gives a cheap signal for choosing between the "thick" (back) and "thin"
(front) Arabic letters that share one Latin letter.

HOW: The word is case-folded, its harmony class is computed once, and
each character is mapped independently through a fixed letter table.
Five letters have a back and a front form (HarmonyPair); the rest map to
a single glyph. A word-initial "a" is written with the vowel-initial
marker (آ) instead of its table form.

RULES:
- Output depends only on the case-folded word (and the digit option)
- Back harmony: the word contains any of a, ı, o, u
- Harmony-sensitive letters: a, g, k, s, t
- Unknown characters pass through unchanged (digits, Arabic script, â, ...)
- One output character per input character: no digraphs, no gemination,
  no loanword spellings
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union

from ottoman_converter.config import DEFAULT_OPTIONS, ConverterOptions
from ottoman_converter.core.ir import HarmonyClass
from ottoman_converter.core.tokenizer import fold_case

BACK_VOWELS = frozenset("aıou")

VOWEL_INITIAL_MARKER = "آ"
"""Written in place of the table form of a word-initial "a"."""


@dataclass(frozen=True)
class HarmonyPair:
    """A letter whose script form depends on the word's harmony class."""

    back: str
    front: str

    def select(self, harmony: HarmonyClass) -> str:
        return self.back if harmony is HarmonyClass.BACK else self.front


LETTER_TABLE: Dict[str, Union[str, HarmonyPair]] = {
    "a": HarmonyPair(back="ا", front="ه"),
    "b": "ب",
    "c": "ج",
    "ç": "چ",
    "d": "د",
    "e": "ه",
    "f": "ف",
    "g": HarmonyPair(back="غ", front="گ"),
    "ğ": "غ",
    "h": "ه",
    "ı": "ى",
    "i": "ي",
    "j": "ژ",
    "k": HarmonyPair(back="ق", front="ك"),
    "l": "ل",
    "m": "م",
    "n": "ن",
    "o": "و",
    "ö": "و",
    "p": "پ",
    "r": "ر",
    "s": HarmonyPair(back="ص", front="س"),
    "ş": "ش",
    "t": HarmonyPair(back="ط", front="ت"),
    "u": "و",
    "ü": "و",
    "v": "و",
    "y": "ي",
    "z": "ز",
}

ARABIC_INDIC_DIGITS: Dict[str, str] = {
    str(n): chr(0x0660 + n) for n in range(10)
}


def harmony_class(word: str) -> HarmonyClass:
    """Classify a word as back or front harmony.

    RULES:
    - Case-insensitive (Turkish folding, so "KAPI" is back)
    - Back if any of a, ı, o, u occurs anywhere in the word
    """
    folded = fold_case(word)
    if any(char in BACK_VOWELS for char in folded):
        return HarmonyClass.BACK
    return HarmonyClass.FRONT


def map_letter(
    char: str,
    harmony: HarmonyClass,
    options: ConverterOptions = DEFAULT_OPTIONS,
) -> str:
    """Map one lowercase character to its script form."""
    entry = LETTER_TABLE.get(char)
    if isinstance(entry, HarmonyPair):
        return entry.select(harmony)
    if entry is not None:
        return entry
    if options.arabic_indic_digits and char in ARABIC_INDIC_DIGITS:
        return ARABIC_INDIC_DIGITS[char]
    return char


def fallback(word: str, options: Optional[ConverterOptions] = None) -> str:
    """Transliterate a single word with the letter table and harmony rule.

    WHY: Used for every word the dictionary does not know. It must never
    fail, and the same word must always produce the same output.

    HOW: Fold case, compute the harmony class once, map each character,
    and replace the first output character with the vowel-initial marker
    when the word starts with "a".

    Args:
        word: A single word token (no whitespace or punctuation).
        options: Conversion options; only arabic_indic_digits applies here.

    Returns:
        The Ottoman-script rendering. Empty input returns "".
    """
    options = options or DEFAULT_OPTIONS
    folded = fold_case(word)
    harmony = harmony_class(folded)

    mapped = []
    for index, char in enumerate(folded):
        if index == 0 and char == "a":
            mapped.append(VOWEL_INITIAL_MARKER)
        else:
            mapped.append(map_letter(char, harmony, options))
    return "".join(mapped)
