"""Tests for the dictionary HTTP client and the static dictionary.

WHY: The client is the only code that talks to the dictionary service.
It must send one well-formed batch request, normalize the response, and
turn every kind of service failure into LookupUnavailableError so the
converter can fall back.

HOW: httpx.MockTransport plays the dictionary service in-process. Each
test installs a handler that inspects the request and returns a canned
response (or raises a transport error).

RULES:
- The real service is never called
- Async client calls run under asyncio.run()
"""

import asyncio
import json

import httpx
import pytest

from ottoman_converter.api.base import DictionaryAPIError, LookupUnavailableError
from ottoman_converter.api.client import DictionaryClient
from ottoman_converter.api.static import StaticDictionary, load_dictionary_file

_BASE_URL = "http://dictionary.test"


def _run_with(handler, call):
    """Run ``call(client)`` against a client backed by ``handler``."""
    async def _run():
        transport = httpx.MockTransport(handler)
        async with DictionaryClient(base_url=_BASE_URL, api_key="", transport=transport) as client:
            return await call(client)

    return asyncio.run(_run())


class TestBatchLookup:

    def test_posts_words_and_parses_mapping(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"kitap": "كتاب"})

        mapping = _run_with(handler, lambda c: c.batch_lookup(["kitap", "kapı"]))
        assert mapping == {"kitap": "كتاب"}
        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/dictionary/batch-lookup"
        assert json.loads(seen[0].content) == {"words": ["kitap", "kapı"]}

    def test_response_keys_are_folded(self):
        def handler(request):
            return httpx.Response(200, json={"KAPI": "قپو", "İzmir": "ازمير"})

        mapping = _run_with(handler, lambda c: c.batch_lookup(["kapı", "izmir"]))
        assert mapping == {"kapı": "قپو", "izmir": "ازمير"}

    def test_empty_word_list_skips_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert _run_with(handler, lambda c: c.batch_lookup([])) == {}

    def test_server_error_raises_api_error(self):
        def handler(request):
            return httpx.Response(500, text="database is locked")

        with pytest.raises(DictionaryAPIError) as exc_info:
            _run_with(handler, lambda c: c.batch_lookup(["ev"]))
        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value, LookupUnavailableError)

    def test_transport_error_raises_lookup_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(LookupUnavailableError, match="unreachable"):
            _run_with(handler, lambda c: c.batch_lookup(["ev"]))

    def test_null_value_is_malformed(self):
        def handler(request):
            return httpx.Response(200, json={"ev": None})

        with pytest.raises(LookupUnavailableError, match="Malformed"):
            _run_with(handler, lambda c: c.batch_lookup(["ev"]))

    def test_non_json_body_is_malformed(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(LookupUnavailableError, match="invalid JSON"):
            _run_with(handler, lambda c: c.batch_lookup(["ev"]))

    def test_bearer_token_sent_when_configured(self):
        seen = []

        def handler(request):
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(200, json={})

        async def _run():
            transport = httpx.MockTransport(handler)
            async with DictionaryClient(base_url=_BASE_URL, api_key="secret", transport=transport) as client:
                await client.batch_lookup(["ev"])

        asyncio.run(_run())
        assert seen == ["Bearer secret"]

    def test_requires_context_manager(self):
        client = DictionaryClient(base_url=_BASE_URL)
        with pytest.raises(RuntimeError, match="async context manager"):
            asyncio.run(client.batch_lookup(["ev"]))


class TestSingleEntryOperations:

    def test_lookup_found(self):
        def handler(request):
            assert request.url.path == "/api/dictionary/lookup"
            assert request.url.params["word"] == "kitap"
            return httpx.Response(200, json={"ottoman": "كتاب"})

        assert _run_with(handler, lambda c: c.lookup("kitap")) == "كتاب"

    def test_lookup_missing(self):
        def handler(request):
            return httpx.Response(200, json={"ottoman": None})

        assert _run_with(handler, lambda c: c.lookup("xyz")) is None

    def test_search_parses_entries(self):
        def handler(request):
            assert request.url.params["q"] == "kit"
            return httpx.Response(200, json=[
                {"id": 1, "turkish": "kitap", "ottoman": "كتاب", "category": "GENERAL"},
                {"id": 2, "turkish": "kitabe", "ottoman": "كتابه", "category": None},
            ])

        entries = _run_with(handler, lambda c: c.search("kit"))
        assert [(e.id, e.turkish, e.category) for e in entries] == [
            (1, "kitap", "GENERAL"),
            (2, "kitabe", "GENERAL"),
        ]

    def test_short_search_skips_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert _run_with(handler, lambda c: c.search("k")) == []

    def test_add_word(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"id": 7, "turkish": "kalem", "ottoman": "قلم", "category": "GENERAL"})

        entry = _run_with(handler, lambda c: c.add_word("kalem", "قلم"))
        assert entry.id == 7
        assert seen == [{"turkish": "kalem", "ottoman": "قلم", "category": "GENERAL"}]

    def test_add_word_requires_both_fields(self):
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(ValueError, match="required"):
            _run_with(handler, lambda c: c.add_word("kalem", ""))

    def test_add_duplicate_raises_api_error(self):
        def handler(request):
            return httpx.Response(500, json={"error": "UNIQUE constraint failed"})

        with pytest.raises(DictionaryAPIError):
            _run_with(handler, lambda c: c.add_word("kalem", "قلم"))


class TestStaticDictionary:

    def test_keys_folded(self):
        dictionary = StaticDictionary({"KİTAP": "كتاب", "Işık": "ایشیق"})
        assert "kitap" in dictionary
        assert "ışık" in dictionary
        assert len(dictionary) == 2

    def test_batch_lookup_returns_hits_only(self):
        dictionary = StaticDictionary({"kitap": "كتاب"})
        assert asyncio.run(dictionary.batch_lookup(["kitap", "ev"])) == {"kitap": "كتاب"}

    def test_load_mapping_file(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(json.dumps({"Kitap": "كتاب"}, ensure_ascii=False), encoding="utf-8")
        assert "kitap" in load_dictionary_file(path)

    def test_load_entry_list_file(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text(
            json.dumps([{"turkish": "kalem", "ottoman": "قلم"}], ensure_ascii=False),
            encoding="utf-8",
        )
        dictionary = load_dictionary_file(path)
        assert asyncio.run(dictionary.batch_lookup(["kalem"])) == {"kalem": "قلم"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_dictionary_file(tmp_path / "nope.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "words.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid dictionary file"):
            load_dictionary_file(path)
