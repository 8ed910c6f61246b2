"""In-memory dictionary backed by a plain mapping or a JSON file.

WHY: Offline conversion, demos, and tests need a dictionary that behaves
exactly like the remote service without a network. A JSON word list is
also the simplest way for an editor to ship a handful of overrides.

HOW: StaticDictionary folds its keys once at construction and answers
batch lookups by dict membership. load_dictionary_file() reads a JSON
object (word → script) or a list of entry records.

RULES:
- Keys are folded with the Turkish-aware fold_case
- Later duplicates (after folding) overwrite earlier ones
- A missing file or malformed JSON raises ValueError with the path
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Mapping, Union

import jsonschema

from ottoman_converter.api.base import DictionaryLookup
from ottoman_converter.api.models import DictionaryEntry, parse_batch_response
from ottoman_converter.core.tokenizer import fold_case


class StaticDictionary(DictionaryLookup):
    """A fixed, in-memory word → script table."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: Dict[str, str] = {
            fold_case(word): script for word, script in (entries or {}).items()
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: str) -> bool:
        return fold_case(word) in self._entries

    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        found: Dict[str, str] = {}
        for word in words:
            key = fold_case(word)
            if key in self._entries:
                found[key] = self._entries[key]
        return found


def load_dictionary_file(path: Union[str, Path]) -> StaticDictionary:
    """Load a StaticDictionary from a JSON file.

    WHY: Lets the CLI apply curated overrides without a running service.

    HOW: Accepts either the batch-lookup response shape
    (``{"kitap": "كتاب"}``) or a list of entry records
    (``[{"turkish": "kitap", "ottoman": "كتاب"}]``).

    Args:
        path: Path to a UTF-8 JSON file.

    Returns:
        StaticDictionary with the file's entries.

    Raises:
        ValueError: If the file is missing or not one of the two shapes.
    """
    path = Path(path)
    if not path.is_file():
        raise ValueError("Dictionary file not found: {}".format(path))

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, list):
            entries = [DictionaryEntry.from_dict(item) for item in data]
            return StaticDictionary({e.turkish: e.ottoman for e in entries})
        return StaticDictionary(parse_batch_response(data))
    except (json.JSONDecodeError, jsonschema.ValidationError) as exc:
        raise ValueError("Invalid dictionary file {}: {}".format(path, exc)) from exc
