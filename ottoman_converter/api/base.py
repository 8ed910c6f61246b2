"""Abstract dictionary lookup interface and its error types.

WHY: The converter only needs one thing from the dictionary: "given these
words, which ones do you have curated forms for?" Keeping that contract
separate from any transport lets the core run against the HTTP service,
an in-memory table, or a test double without caring which.

HOW: DictionaryLookup is an ABC with a single async ``batch_lookup``
method. The exceptions below are what implementations raise when the
dictionary cannot answer; the converter turns them into full fallback.

RULES:
- ``words`` is the distinct, case-folded word list of one request
- The returned dict is keyed by case-folded word
- Absent keys are not errors; they mean "use the fallback"
- One call per conversion request, never one call per word
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List


class LookupUnavailableError(Exception):
    """Raised when the dictionary could not be consulted.

    WHY: Callers need one type that covers network failures, timeouts,
    error responses, and malformed payloads, since all of them are
    recovered the same way: convert with an empty mapping.
    """


class DictionaryAPIError(LookupUnavailableError):
    """Raised when the dictionary service returns an error response.

    RULES:
    - Always include status_code and message
    - message is the response body text or a summary
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Dictionary API error {status_code}: {message}")


class DictionaryLookup(ABC):
    """Abstract source of curated Ottoman spellings."""

    @abstractmethod
    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        """Return curated script forms for the given case-folded words.

        Args:
            words: Distinct, case-folded words from one conversion request.

        Returns:
            Mapping of case-folded word → script string for every match.
            Words without a curated form are simply absent.
        """
