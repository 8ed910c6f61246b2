"""Dictionary service request and response models.

WHY: The dictionary service returns plain JSON: a word → script object
for batch lookups and entry records for search and create. Typed
dataclasses and a JSON Schema make those shapes explicit and catch a
malformed payload before it reaches the converter.

HOW: DictionaryEntry maps 1:1 to an entry record with a from_dict
factory. The batch response is validated with jsonschema and its keys
are re-folded so the converter's lookups match regardless of how the
service lowercased them.

RULES:
- Batch response: JSON object, every value a string; absent words are absent
- Null values are invalid (the service omits misses instead)
- Entry category defaults to "GENERAL" when the service omits it
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import jsonschema

from ottoman_converter.config import DEFAULT_CATEGORY
from ottoman_converter.core.tokenizer import fold_case

BATCH_LOOKUP_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {"type": "string"},
}

ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["turkish", "ottoman"],
    "properties": {
        "id": {"type": ["integer", "null"]},
        "turkish": {"type": "string"},
        "ottoman": {"type": "string"},
        "category": {"type": ["string", "null"]},
    },
}


@dataclass
class DictionaryEntry:
    """A single curated dictionary entry.

    RULES:
    - id is None for entries not yet stored by the service
    - turkish is the Latin-alphabet headword, ottoman its script form
    """

    turkish: str
    ottoman: str
    category: str = DEFAULT_CATEGORY
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DictionaryEntry:
        """Parse an entry from a raw API response dict."""
        jsonschema.validate(instance=data, schema=ENTRY_SCHEMA)
        return cls(
            turkish=data["turkish"],
            ottoman=data["ottoman"],
            category=data.get("category") or DEFAULT_CATEGORY,
            id=data.get("id"),
        )


def parse_batch_response(data: Any) -> Dict[str, str]:
    """Validate a batch-lookup payload and fold its keys.

    Raises:
        jsonschema.ValidationError: If the payload is not a string → string object.
    """
    jsonschema.validate(instance=data, schema=BATCH_LOOKUP_RESPONSE_SCHEMA)
    return {fold_case(word): script for word, script in data.items()}
