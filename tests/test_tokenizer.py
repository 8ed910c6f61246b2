"""Unit tests for the tokenizer and Turkish case folding.

WHY: Every later stage trusts the tokenizer to keep the input intact.
A dropped space or a merged punctuation mark would silently corrupt the
converted text.

HOW: Tests cover classification of each token kind, losslessness over a
range of awkward inputs, distinct lookup keys, and the I/İ folding rules.

RULES:
- Joined token texts must always equal the input
- Punctuation set is . , ? ! : ; ( )
"""

import unicodedata

import pytest

from ottoman_converter.core.ir import TokenKind
from ottoman_converter.core.tokenizer import (
    candidate_words,
    distinct_lookup_keys,
    fold_case,
    tokenize,
)


def _kinds(text):
    return [(t.text, t.kind) for t in tokenize(text)]


class TestClassification:
    """Each run is classified as word, whitespace or punctuation."""

    def test_sentence(self):
        assert _kinds("Merhaba, dünya!") == [
            ("Merhaba", TokenKind.WORD),
            (",", TokenKind.PUNCTUATION),
            (" ", TokenKind.WHITESPACE),
            ("dünya", TokenKind.WORD),
            ("!", TokenKind.PUNCTUATION),
        ]

    def test_parentheses_are_punctuation(self):
        assert _kinds("(kitap)") == [
            ("(", TokenKind.PUNCTUATION),
            ("kitap", TokenKind.WORD),
            (")", TokenKind.PUNCTUATION),
        ]

    def test_punctuation_run_is_one_token(self):
        tokens = tokenize("ev...")
        assert [t.text for t in tokens] == ["ev", "..."]
        assert tokens[1].kind is TokenKind.PUNCTUATION

    def test_mixed_whitespace_run_is_one_token(self):
        tokens = tokenize("ev\n\t kapı")
        assert [t.text for t in tokens] == ["ev", "\n\t ", "kapı"]
        assert tokens[1].kind is TokenKind.WHITESPACE

    def test_apostrophe_stays_inside_word(self):
        tokens = tokenize("İstanbul'da")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.WORD

    def test_digits_and_arabic_script_are_words(self):
        assert _kinds("1923 كتاب") == [
            ("1923", TokenKind.WORD),
            (" ", TokenKind.WHITESPACE),
            ("كتاب", TokenKind.WORD),
        ]

    def test_other_symbols_are_word_characters(self):
        tokens = tokenize("a-b")
        assert [t.text for t in tokens] == ["a-b"]

    def test_empty_input(self):
        assert tokenize("") == []


class TestLosslessness:
    """Concatenated token texts reproduce the input exactly."""

    @pytest.mark.parametrize("text", [
        "",
        " ",
        "ev",
        "  leading and trailing  ",
        "Askerler sabah erkenden yola çıktılar...",
        "Ne?! (Hayır: evet; belki.)",
        "satır bir\r\nsatır iki\n\n",
        "non breaking spaces",
        "كتاب and 1923, mixed!",
        "İIıi",
    ])
    def test_roundtrip(self, text):
        assert "".join(t.text for t in tokenize(text)) == text

    def test_tokens_are_immutable(self):
        token = tokenize("ev")[0]
        with pytest.raises(AttributeError):
            token.text = "kapı"


class TestFoldCase:
    """Turkish-aware lowercasing."""

    def test_dotless_capital_i(self):
        assert fold_case("IŞIK") == "ışık"

    def test_dotted_capital_i(self):
        assert fold_case("İZMİR") == "izmir"

    def test_plain_word(self):
        assert fold_case("Ev") == "ev"

    def test_lowercase_unchanged(self):
        assert fold_case("kapı") == "kapı"

    def test_decomposed_dotted_capital_i(self):
        assert fold_case(unicodedata.normalize("NFD", "İL")) == "il"

    def test_canonically_equivalent_inputs_share_a_key(self):
        composed = "İZMİR"
        assert fold_case(unicodedata.normalize("NFD", composed)) == fold_case(composed)


class TestLookupKeys:
    """Distinct case-folded keys for the batch lookup."""

    def test_keys_are_distinct_and_folded(self):
        assert distinct_lookup_keys(tokenize("Ev ev EV, kapı.")) == ["ev", "kapı"]

    def test_first_occurrence_order(self):
        assert distinct_lookup_keys(tokenize("kalem kitap kalem")) == ["kalem", "kitap"]

    def test_no_words(self):
        assert distinct_lookup_keys(tokenize(" ,. ")) == []

    def test_candidate_words_keep_original_token(self):
        candidates = candidate_words(tokenize("Kitap ve"))
        assert [(c.token.text, c.key) for c in candidates] == [("Kitap", "kitap"), ("ve", "ve")]
