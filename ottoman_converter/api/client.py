"""Async HTTP client for the Ottoman dictionary service.

WHY: The converter needs curated spellings for the words of each request
in a single round trip, and the CLI needs the service's single-entry
operations (exact lookup, search, add). This module hides the HTTP
details behind one client class so callers (converter, CLI, server,
tests) only deal with Python types.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. DictionaryClient is an
async context manager. Enter it to get a connection pool, exit to close
it. batch_lookup implements the DictionaryLookup contract; lookup,
search and add_word wrap the remaining service endpoints.

RULES:
- Always use the async context manager (async with DictionaryClient(...) as client:)
- batch_lookup sends distinct words once and never calls per word
- An empty word list returns {} without a request
- Transport errors and malformed payloads raise LookupUnavailableError
- Non-2xx responses raise DictionaryAPIError (a LookupUnavailableError)
- search() returns [] for queries shorter than 2 characters, like the service
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
import jsonschema

from ottoman_converter.api.base import (
    DictionaryAPIError,
    DictionaryLookup,
    LookupUnavailableError,
)
from ottoman_converter.api.models import DictionaryEntry, parse_batch_response
from ottoman_converter.config import (
    DEFAULT_CATEGORY,
    DEFAULT_LOOKUP_TIMEOUT_S,
    DICTIONARY_API_KEY,
    load_base_url,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BATCH_LOOKUP_PATH = "/api/dictionary/batch-lookup"
_LOOKUP_PATH = "/api/dictionary/lookup"
_SEARCH_PATH = "/api/dictionary/search"
_ENTRIES_PATH = "/api/dictionary"

_SEARCH_MIN_CHARS = 2


class DictionaryClient(DictionaryLookup):
    """Async client for the dictionary service.

    RULES:
    - Use as: async with DictionaryClient() as client: ...
    - base_url defaults to DICTIONARY_BASE_URL from config
    - api_key is optional; when set it is sent as a Bearer token
    - An httpx transport may be injected (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout_s: float = DEFAULT_LOOKUP_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or load_base_url()).rstrip("/")
        self._api_key = api_key if api_key is not None else DICTIONARY_API_KEY
        self._timeout_s = timeout_s
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> DictionaryClient:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=httpx.Timeout(self._timeout_s),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "DictionaryClient must be used as an async context manager: "
                "async with DictionaryClient() as client: ..."
            )
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        RULES:
        - httpx transport/timeout errors become LookupUnavailableError
        - Non-2xx responses become DictionaryAPIError
        - A body that is not JSON becomes LookupUnavailableError
        """
        client = self._ensure_client()
        try:
            resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise LookupUnavailableError(
                f"Dictionary service unreachable: {exc}"
            ) from exc

        if resp.status_code not in (200, 201):
            raise DictionaryAPIError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as exc:
            raise LookupUnavailableError(
                f"Dictionary service returned invalid JSON for {path}"
            ) from exc

    # ------------------------------------------------------------------
    # Batch lookup (consumed by the converter)
    # ------------------------------------------------------------------

    async def batch_lookup(self, words: List[str]) -> Dict[str, str]:
        """Fetch curated forms for the distinct words of one request.

        HOW: POSTs ``{"words": [...]}`` to the batch endpoint and validates
        the word → script object that comes back.

        Args:
            words: Distinct, case-folded words.

        Returns:
            Case-folded word → script string for every match.
        """
        if not words:
            return {}

        data = await self._request("POST", _BATCH_LOOKUP_PATH, json={"words": list(words)})
        try:
            mapping = parse_batch_response(data)
        except jsonschema.ValidationError as exc:
            raise LookupUnavailableError(
                f"Malformed batch-lookup response: {exc.message}"
            ) from exc

        logger.debug("Batch lookup: %d words, %d hits", len(words), len(mapping))
        return mapping

    # ------------------------------------------------------------------
    # Single-entry operations
    # ------------------------------------------------------------------

    async def lookup(self, word: str) -> Optional[str]:
        """Return the curated form of one word, or None if it is unknown."""
        if not word:
            raise ValueError("Word is required for lookup")
        data = await self._request("GET", _LOOKUP_PATH, params={"word": word})
        if not isinstance(data, dict):
            raise LookupUnavailableError("Malformed lookup response")
        return data.get("ottoman")

    async def search(self, query: str) -> List[DictionaryEntry]:
        """Search entries whose Turkish or Ottoman form contains the query.

        RULES:
        - Queries shorter than 2 characters return [] without a request
        - Results are parsed into DictionaryEntry objects
        """
        if not query or len(query) < _SEARCH_MIN_CHARS:
            return []
        data = await self._request("GET", _SEARCH_PATH, params={"q": query})
        if not isinstance(data, list):
            raise LookupUnavailableError("Malformed search response")
        try:
            return [DictionaryEntry.from_dict(item) for item in data]
        except jsonschema.ValidationError as exc:
            raise LookupUnavailableError(
                f"Malformed search response: {exc.message}"
            ) from exc

    async def add_word(
        self,
        turkish: str,
        ottoman: str,
        category: str = DEFAULT_CATEGORY,
    ) -> DictionaryEntry:
        """Create a new dictionary entry.

        Raises:
            ValueError: If turkish or ottoman is empty.
            DictionaryAPIError: If the service rejects the entry
                (e.g. a duplicate headword).
        """
        if not turkish or not ottoman:
            raise ValueError("Turkish and Ottoman fields are required")

        body = {"turkish": turkish, "ottoman": ottoman, "category": category or DEFAULT_CATEGORY}
        data = await self._request("POST", _ENTRIES_PATH, json=body)
        try:
            entry = DictionaryEntry.from_dict(data)
        except jsonschema.ValidationError as exc:
            raise LookupUnavailableError(
                f"Malformed create response: {exc.message}"
            ) from exc

        logger.info("Added dictionary entry %s (id=%s)", entry.turkish, entry.id)
        return entry
