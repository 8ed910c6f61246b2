"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: Each endpoint has its own request and response model. Enum values
reuse the core IR enums so the wire format matches the internal one.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose internal implementation details
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ottoman_converter.core.ir import HarmonyClass, ResolutionSource, TokenKind


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ConvertRequest(BaseModel):
    """Text to convert plus optional rendering flags."""

    text: str = Field(description="Latin-alphabet Turkish text to convert.")
    ottoman_punctuation: bool = Field(
        default=False,
        description="Render ',' and '?' as '،' and '؟'.",
    )
    arabic_indic_digits: bool = Field(
        default=False,
        description="Render digits inside words as Arabic-Indic digits.",
    )

    model_config = {"json_schema_extra": {
        "examples": [{"text": "Kitap ve kalem."}]
    }}


class FallbackRequest(BaseModel):
    """A single word for the fallback transliterator."""

    word: str = Field(description="A single word (no spaces or punctuation).")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class SegmentResponse(BaseModel):
    """The rendering of one input token."""

    text: str = Field(description="Input token text.")
    output: str = Field(description="Rendered output for the token.")
    kind: TokenKind = Field(description="Token classification.")
    source: ResolutionSource = Field(description="Which source produced the output.")


class ConvertResponse(BaseModel):
    """Result of a conversion request.

    RULES:
    - output is the concatenation of every segment's output
    - lookup_failed is true when the dictionary could not be consulted
    """

    output: str = Field(description="Converted Ottoman-script text.")
    segments: List[SegmentResponse] = Field(description="Per-token rendering details.")
    lookup_failed: bool = Field(description="True if the dictionary was unavailable.")


class FallbackResponse(BaseModel):
    """Fallback rendering of a single word."""

    word: str = Field(description="The input word.")
    harmony: HarmonyClass = Field(description="Vowel-harmony class of the word.")
    output: str = Field(description="Fallback Ottoman-script rendering.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
    dictionary: bool = Field(description="True if a dictionary service is configured.")
