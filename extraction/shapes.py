"""Recognize the wrapper a parsed model response uses around its questions.

Models return the question list as a bare array, nested under "questions" or
"items", as a single question object, or echoed back inside a JSON-Schema
style document. `classify_shape` decides which topology a value has before
`to_question_array` pulls the list out of it.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, List, NamedTuple, Optional

from core.errors import ShapeError
from core.logging_utils import get_logger

LOGGER = get_logger()

UNRECOGNIZED_MESSAGE = "Generated content is not an array of questions or a recognized wrapper"
SINGLE_QUESTION_STRICT_MESSAGE = (
    "Generated content is a single question object, expected an array of questions"
)
EMPTY_SCHEMA_MESSAGE = "Schema-style content does not contain any example questions"


class Shape(enum.Enum):
    ARRAY = "array"
    QUESTIONS_WRAPPER = "questions_wrapper"
    SINGLE_QUESTION = "single_question"
    ITEMS_WRAPPER = "items_wrapper"
    SCHEMA_EXAMPLE = "schema_example"
    EMPTY_SCHEMA = "empty_schema"
    UNRECOGNIZED = "unrecognized"


class ShapeMatch(NamedTuple):
    shape: Shape
    questions: Optional[List[Any]] = None


def looks_like_question(value: Any) -> bool:
    return isinstance(value, dict) and "question" in value


def _question_array(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and looks_like_question(value[0])


def _is_schema_document(obj: Dict[str, Any]) -> bool:
    return obj.get("type") == "array" and isinstance(obj.get("items"), (dict, list))


def _schema_examples(obj: Dict[str, Any]) -> Optional[List[Any]]:
    keys = ["examples"] + [k for k in obj if k not in ("examples", "type")]
    for key in keys:
        if _question_array(obj.get(key)):
            LOGGER.info('Found questions in property "%s"', key)
            return obj[key]
    return None


def classify_shape(parsed: Any) -> ShapeMatch:
    """Tag `parsed` with the first matching topology."""
    if isinstance(parsed, list):
        return ShapeMatch(Shape.ARRAY, parsed)
    if not isinstance(parsed, dict):
        return ShapeMatch(Shape.UNRECOGNIZED)

    if isinstance(parsed.get("questions"), list):
        return ShapeMatch(Shape.QUESTIONS_WRAPPER, parsed["questions"])
    if "question" in parsed:
        return ShapeMatch(Shape.SINGLE_QUESTION, [parsed])
    if _question_array(parsed.get("items")):
        return ShapeMatch(Shape.ITEMS_WRAPPER, parsed["items"])
    if _is_schema_document(parsed):
        examples = _schema_examples(parsed)
        if examples is None:
            return ShapeMatch(Shape.EMPTY_SCHEMA)
        return ShapeMatch(Shape.SCHEMA_EXAMPLE, examples)
    return ShapeMatch(Shape.UNRECOGNIZED)


def to_question_array(parsed: Any, strict: bool) -> List[Any]:
    """Return the flat, ordered list of question-like objects in `parsed`.

    A lone question object is only accepted in lenient mode; in strict mode it
    cannot be told apart from a malformed batch.
    """
    match = classify_shape(parsed)

    if match.shape is Shape.ARRAY:
        return match.questions

    LOGGER.info("Parsed content is not an array: %s", type(parsed).__name__)

    if match.shape is Shape.SINGLE_QUESTION:
        if strict:
            raise ShapeError(SINGLE_QUESTION_STRICT_MESSAGE)
        LOGGER.info("Found single question object, wrapping in array")
        return match.questions
    if match.shape is Shape.EMPTY_SCHEMA:
        raise ShapeError(EMPTY_SCHEMA_MESSAGE)
    if match.shape is Shape.UNRECOGNIZED:
        raise ShapeError(UNRECOGNIZED_MESSAGE)

    LOGGER.info("Found %s with %d questions", match.shape.value, len(match.questions))
    return match.questions
