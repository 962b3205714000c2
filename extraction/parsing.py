"""Candidate extraction and resilient JSON parsing for model output."""

from __future__ import annotations

import json
from typing import Any

from core.errors import ExtractionExhaustedError, ParseFailureError
from core.logging_utils import get_logger, preview
from extraction.brackets import find_balanced_json, isolate_array
from extraction.fences import extract_json_from_code_blocks

LOGGER = get_logger()


def extract_candidate(raw: str) -> str:
    """Best JSON-looking fragment of `raw`; never raises."""
    candidate = isolate_array(extract_json_from_code_blocks(raw))
    LOGGER.info("Cleaned content (first 200 chars): %s", preview(candidate))
    return candidate


def _has_json_opener(text: str) -> bool:
    return "{" in text or "[" in text


def parse_json_content(candidate: str, original_raw: str) -> Any:
    """Parse `candidate`, falling back to bracket matching over `original_raw`.

    The fallback scans the original text rather than the failed candidate,
    because the candidate may be a mis-delimited slice of it.

    Raises:
        ExtractionExhaustedError: nothing resembling JSON exists in either text.
        ParseFailureError: JSON-like text exists but none of it parses; the
            message is that of the first parse error.
    """
    try:
        parsed = json.loads(candidate)
        LOGGER.info("Successfully parsed JSON content")
        return parsed
    except json.JSONDecodeError as e:
        first_error = e
        LOGGER.error("JSON parsing failed: %s", e)
        LOGGER.error("Cleaned content that failed to parse: %s", preview(candidate))

    LOGGER.info("Attempting to find valid JSON by bracket matching")
    fragment = find_balanced_json(original_raw)
    if fragment is not None:
        try:
            parsed = json.loads(fragment)
            LOGGER.info("Successfully parsed JSON using bracket matching approach")
            return parsed
        except json.JSONDecodeError as e:
            LOGGER.error("Second parsing attempt failed: %s", e)
    elif not _has_json_opener(candidate) and not _has_json_opener(original_raw):
        raise ExtractionExhaustedError() from first_error

    raise ParseFailureError(str(first_error)) from first_error
