"""Configuration constants, conversion options, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The dictionary service location, debounce delay,
and lookup timeout are plain data rather than logic, so both the
CLI and the HTTP API read the same defaults.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values with os.getenv overrides. Per-call behaviour is
carried by the ConverterOptions dataclass instead of loose keyword
arguments.

RULES:
- DICTIONARY_BASE_URL empty means "no dictionary": conversion is fallback-only
- DEFAULT_DEBOUNCE_S is the quiet period before a live lookup is issued
- DEFAULT_LOOKUP_TIMEOUT_S bounds how long a lookup may delay output
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Dictionary service
# ---------------------------------------------------------------------------

DICTIONARY_BASE_URL = os.getenv("DICTIONARY_BASE_URL", "").strip()
DICTIONARY_API_KEY = os.getenv("DICTIONARY_API_KEY", "").strip()

DEFAULT_CATEGORY = "GENERAL"
"""Category assigned to new dictionary entries when none is given."""

# ---------------------------------------------------------------------------
# Conversion defaults
# ---------------------------------------------------------------------------

DEFAULT_DEBOUNCE_S = float(os.getenv("OTTOMAN_DEBOUNCE_S", "0.5"))
DEFAULT_LOOKUP_TIMEOUT_S = float(os.getenv("OTTOMAN_LOOKUP_TIMEOUT_S", "5.0"))


@dataclass(frozen=True)
class ConverterOptions:
    """Per-conversion settings.

    WHY: Callers (CLI flags, HTTP request fields, live sessions) tweak the
    same handful of behaviours. An explicit, immutable structure documents
    every knob and its default in one place.

    RULES:
    - debounce_s: quiet period after the last edit before a live lookup (0.5s)
    - lookup_timeout_s: upper bound on one batch lookup (5.0s)
    - ottoman_punctuation: render "," and "?" as "،" and "؟" (off)
    - arabic_indic_digits: render 0-9 inside words as ٠-٩ (off)
    """

    debounce_s: float = DEFAULT_DEBOUNCE_S
    lookup_timeout_s: float = DEFAULT_LOOKUP_TIMEOUT_S
    ottoman_punctuation: bool = False
    arabic_indic_digits: bool = False


DEFAULT_OPTIONS = ConverterOptions()


def load_base_url() -> str:
    """Return the configured dictionary service URL.

    WHY: Single-entry commands (lookup, search, add) are meaningless
    without a dictionary service, so they need a clear error instead of
    a confusing connection failure.

    RULES:
    - Raises ValueError if DICTIONARY_BASE_URL is missing or empty
    - Never returns a default/placeholder value
    """
    url = os.getenv("DICTIONARY_BASE_URL", DICTIONARY_BASE_URL).strip()
    if not url:
        raise ValueError(
            "Dictionary service not configured. "
            "Add DICTIONARY_BASE_URL to the .env file in the app folder."
        )
    return url
