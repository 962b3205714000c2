"""Locate JSON inside markdown code fences in model responses.

Models frequently wrap their JSON in ```json fences, sometimes with other or
missing language tags, and sometimes surrounded by prose. The strategies here
are tried in order; the first one that yields non-empty text wins.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from core.logging_utils import get_logger

FENCE = "```"
FENCE_LANGUAGE_TAGS = ("json", "javascript", "js")

_ANY_FENCE_RE = re.compile(r"```\s*(.*?)\s*```", flags=re.DOTALL)
_BARE_IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_+-]{0,19}$")

LOGGER = get_logger()


def _language_fence_pattern(language: str) -> re.Pattern:
    # The tag must not run on into another identifier (```jsonc is not ```json).
    return re.compile(
        FENCE + re.escape(language) + r"(?![\w-])\s*(.*?)\s*" + FENCE,
        flags=re.DOTALL | re.IGNORECASE,
    )


def _drop_language_line(block: str) -> str:
    lines = block.split("\n")
    if len(lines) > 1 and _BARE_IDENTIFIER_RE.match(lines[0].strip()):
        lines = lines[1:]
    return "\n".join(lines).strip()


def extract_code_block_with_language(raw: str, language: str) -> Optional[str]:
    """Return the interior of the first fence tagged with `language`."""
    match = _language_fence_pattern(language).search(raw)
    if match and match.group(1).strip():
        LOGGER.info("Extracted content from %s code block", language)
        return match.group(1).strip()
    return None


def extract_any_code_block(raw: str) -> Optional[str]:
    """Return the interior of the first fence pair, ignoring its tag."""
    match = _ANY_FENCE_RE.search(raw)
    if not match:
        return None
    block = _drop_language_line(match.group(1).strip())
    if not block:
        return None
    LOGGER.info("Extracted content from generic code block")
    return block


def extract_using_split_method(raw: str) -> Optional[str]:
    """Split on the fence marker and take the segment after the first one."""
    parts = raw.split(FENCE)
    if len(parts) < 3:
        return None
    block = _drop_language_line(parts[1].strip())
    if not block:
        return None
    LOGGER.info("Extracted content using split method")
    return block


def _fence_strategies(language: str) -> List[Callable[[str], Optional[str]]]:
    return [
        lambda raw: extract_code_block_with_language(raw, language),
        extract_any_code_block,
        extract_using_split_method,
    ]


def extract_from_fence(raw: str, language: str = "json") -> Optional[str]:
    """Run the fence strategies for one language tag; None if all fail."""
    for strategy in _fence_strategies(language):
        found = strategy(raw)
        if found:
            return found
    return None


def extract_json_from_code_blocks(raw: str) -> str:
    """Return the fenced JSON in `raw`, or the trimmed text itself.

    Text that already starts with an object or array needs no fence handling.
    """
    text = raw.strip()
    if text.startswith(("{", "[")):
        return text
    if FENCE not in text:
        return text

    LOGGER.info("Detected code block in response, attempting to extract JSON content")
    for language in FENCE_LANGUAGE_TAGS:
        found = extract_code_block_with_language(text, language)
        if found:
            return found

    found = extract_from_fence(text, FENCE_LANGUAGE_TAGS[0])
    if found:
        return found

    LOGGER.warning("Failed to extract content from code blocks, using raw content")
    return text
