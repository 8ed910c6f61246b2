"""FastAPI application exposing the converter over HTTP.

WHY: Web front-ends and other tools need the transliteration engine
without embedding Python. FastAPI provides automatic OpenAPI
documentation and request validation.

HOW: A single FastAPI app exposes three endpoints. POST /convert runs
the one-shot pipeline against the dictionary provided by the
get_dictionary dependency (an HTTP client when DICTIONARY_BASE_URL is
set, otherwise none). POST /fallback exposes the fallback transliterator
for a single word. GET /health reports liveness.

RULES:
- Dictionary failures never fail a conversion; lookup_failed is set instead
- The dictionary dependency can be overridden (tests use a StaticDictionary)
- Error responses use the ErrorResponse schema
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, HTTPException

from ottoman_converter import __version__, config
from ottoman_converter.api.base import DictionaryLookup
from ottoman_converter.api.client import DictionaryClient
from ottoman_converter.config import ConverterOptions
from ottoman_converter.core.converter import OttomanConverter
from ottoman_converter.core.fallback import fallback, harmony_class
from ottoman_converter.core.tokenizer import tokenize
from ottoman_converter.server.models import (
    ConvertRequest,
    ConvertResponse,
    ErrorResponse,
    FallbackRequest,
    FallbackResponse,
    HealthResponse,
    SegmentResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Ottoman Converter API",
    description=(
        "Converts Latin-alphabet Turkish text into Ottoman (Arabic-script) "
        "text. Curated dictionary spellings take precedence; every other word "
        "is rendered by a vowel-harmony fallback."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


async def get_dictionary() -> AsyncIterator[Optional[DictionaryLookup]]:
    """Provide the dictionary for one request, or None if none is configured."""
    if not config.DICTIONARY_BASE_URL:
        yield None
        return
    async with DictionaryClient(base_url=config.DICTIONARY_BASE_URL) as client:
        yield client


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post(
    "/convert",
    response_model=ConvertResponse,
    tags=["conversion"],
    summary="Convert Latin-alphabet text to Ottoman script",
    description=(
        "Tokenizes the text, looks up its distinct words in the dictionary "
        "with a single batch request, and renders every miss with the "
        "fallback transliterator. Whitespace and punctuation are preserved."
    ),
)
async def convert_text(
    request: ConvertRequest,
    dictionary: Optional[DictionaryLookup] = Depends(get_dictionary),
) -> ConvertResponse:
    options = ConverterOptions(
        ottoman_punctuation=request.ottoman_punctuation,
        arabic_indic_digits=request.arabic_indic_digits,
    )
    converter = OttomanConverter(dictionary, options)

    result = await converter.convert(request.text)
    if result.lookup_failed:
        logger.debug("Returning fallback-only conversion for %d segments", len(result.segments))
    return ConvertResponse(
        output=result.text,
        segments=[
            SegmentResponse(
                text=segment.token.text,
                output=segment.text,
                kind=segment.token.kind,
                source=segment.source,
            )
            for segment in result.segments
        ],
        lookup_failed=result.lookup_failed,
    )


@app.post(
    "/fallback",
    response_model=FallbackResponse,
    tags=["conversion"],
    summary="Render a single word with the fallback transliterator",
    responses={
        400: {"model": ErrorResponse, "description": "Input is not a single word (empty input is accepted)"},
    },
)
async def fallback_word(request: FallbackRequest) -> FallbackResponse:
    tokens = tokenize(request.word)
    # Empty input has no tokens and renders as ""
    if tokens and (len(tokens) != 1 or not tokens[0].is_word):
        raise HTTPException(
            status_code=400,
            detail="Expected a single word without whitespace or punctuation",
        )
    return FallbackResponse(
        word=request.word,
        harmony=harmony_class(request.word),
        output=fallback(request.word),
    )


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health check",
)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        dictionary=bool(config.DICTIONARY_BASE_URL),
    )


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)
