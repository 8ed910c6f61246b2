"""Dictionary access package: the boundary to curated Ottoman spellings.

WHY: The converter needs curated spellings for the words of each request,
and the CLI needs the dictionary service's single-entry operations. This
package keeps every dictionary source behind one abstract interface.

HOW: base.py defines the DictionaryLookup ABC and the error types.
client.py talks to the HTTP service with httpx; static.py answers from an
in-memory table or JSON file. models.py holds the payload dataclasses and
JSON Schemas.

RULES:
- All HTTP calls go through DictionaryClient (no direct httpx usage elsewhere)
- Every source implements DictionaryLookup.batch_lookup
- Lookup failures are raised as LookupUnavailableError subclasses
"""

from ottoman_converter.api.base import (
    DictionaryAPIError,
    DictionaryLookup,
    LookupUnavailableError,
)
from ottoman_converter.api.client import DictionaryClient
from ottoman_converter.api.models import DictionaryEntry
from ottoman_converter.api.static import StaticDictionary, load_dictionary_file

__all__ = [
    "DictionaryAPIError",
    "DictionaryClient",
    "DictionaryEntry",
    "DictionaryLookup",
    "LookupUnavailableError",
    "StaticDictionary",
    "load_dictionary_file",
]
