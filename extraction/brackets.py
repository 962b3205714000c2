"""Bracket matching over raw model text."""

from __future__ import annotations

from typing import Optional

from core.logging_utils import get_logger, preview

LOGGER = get_logger()

_CLOSERS = {"{": "}", "[": "]"}


def find_balanced_json(text: str) -> Optional[str]:
    """Return the first balanced {...} or [...] span in `text`, or None.

    Brackets inside double-quoted strings are ignored. A backslash consumes
    the next character unconditionally, so \\" never toggles string state and
    \\\\ leaves no pending escape. The first opening bracket found determines
    what is matched; objects and arrays have no other precedence.
    """
    depth = 0
    in_string = False
    escaped = False
    start = -1
    opener = ""
    closer = ""

    for pos, char in enumerate(text):
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue

        if start == -1:
            if char in _CLOSERS:
                start = pos
                opener = char
                closer = _CLOSERS[char]
                depth = 1
            continue

        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                fragment = text[start:pos + 1]
                LOGGER.info("Found potential JSON by bracket matching: %s", preview(fragment, 100))
                return fragment

    return None


def isolate_array(text: str) -> str:
    """Narrow `text` to its first top-level JSON array.

    Text that already starts with "[" is returned unchanged, as is text that
    starts with "{" (wrappers and single questions are resolved after
    parsing) or holds no balanced array. Unbalanced input is left for the
    parser to reject with a clear error.
    """
    stripped = text.strip()
    if stripped.startswith("[") or stripped.startswith("{"):
        return text

    array_start = stripped.find("[")
    if array_start == -1:
        return text

    LOGGER.info("Content does not start with [, attempting to extract array")
    fragment = find_balanced_json(stripped[array_start:])
    if fragment is None:
        return text

    LOGGER.info("Extracted array portion of content")
    return fragment
