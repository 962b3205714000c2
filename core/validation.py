"""Question record validation and normalization.

Every field is described by a FieldRule: a check that returns the normalized
value or rejects it, and an optional repair used in lenient mode. Rules run in
table order, so later repairs (the default explanation) can rely on fields
validated earlier (correctAnswer). Fields without a repair are required in
both modes.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from core.errors import FieldValidationError
from core.logging_utils import get_logger

QuestionRecord = Dict[str, Any]

OPTION_COUNT = 4
VALID_DIFFICULTIES = ('easy', 'medium', 'hard')
DEFAULT_DIFFICULTY = 'medium'
DEFAULT_CATEGORY = 'General'

LOGGER = get_logger()


class _Rejected(Exception):
    def __init__(self, template: str):
        super().__init__(template)
        self.template = template

    def describe(self, index: int) -> str:
        return self.template.format(n=index + 1)


@dataclass(frozen=True)
class FieldRule:
    field: str
    check: Callable[[Any], Any]
    repair: Optional[Callable[[Any, QuestionRecord], Any]] = None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def placeholder_option(position: int) -> str:
    """Literal used for a missing option at 1-based `position`."""
    return f"Option {position} (placeholder)"


def _check_question(value: Any) -> Any:
    if not _is_text(value):
        raise _Rejected("Question {n} is missing the 'question' field")
    return value


def _check_options_list(value: Any) -> List[Any]:
    if not isinstance(value, list):
        raise _Rejected("Question {n} has invalid or missing 'options' array")
    return list(value)


def _check_option_count(options: List[Any]) -> List[Any]:
    if len(options) != OPTION_COUNT:
        raise _Rejected("Question {n} must have exactly 4 options")
    return options


def _pad_options(options: List[Any], _record: QuestionRecord) -> List[Any]:
    padded = list(options[:OPTION_COUNT])
    while len(padded) < OPTION_COUNT:
        padded.append(placeholder_option(len(padded) + 1))
    return padded


def _check_option_texts(options: List[Any]) -> List[Any]:
    if not all(_is_text(opt) for opt in options):
        raise _Rejected("Question {n} has an empty or non-text option")
    return options


def _repair_option_texts(options: List[Any], _record: QuestionRecord) -> List[str]:
    repaired = []
    for position, opt in enumerate(options, start=1):
        if _is_text(opt):
            repaired.append(opt)
        elif isinstance(opt, (int, float)) and not isinstance(opt, bool):
            repaired.append(str(opt))
        else:
            repaired.append(placeholder_option(position))
    return repaired


def _check_correct_answer(value: Any) -> int:
    if isinstance(value, bool):
        raise _Rejected("Question {n} has an invalid 'correctAnswer' (must be 0-3)")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and 0 <= value < OPTION_COUNT:
        return value
    raise _Rejected("Question {n} has an invalid 'correctAnswer' (must be 0-3)")


def coerce_correct_answer(value: Any, _record: Optional[QuestionRecord] = None) -> int:
    """Lenient correctAnswer: numeric strings in range keep their value, else 0."""
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return 0
        if 0 <= parsed < OPTION_COUNT:
            LOGGER.info("Converted string correctAnswer to number: %d", parsed)
            return parsed
    return 0


def _check_explanation(value: Any) -> Any:
    if not _is_text(value):
        raise _Rejected("Question {n} is missing the 'explanation' field")
    return value


def _default_explanation(_value: Any, record: QuestionRecord) -> str:
    return f"The correct answer is option {record['correctAnswer'] + 1}."


def _check_difficulty(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in VALID_DIFFICULTIES:
        return value.strip().lower()
    raise _Rejected(
        "Question {n} has an invalid 'difficulty' (must be easy, medium, or hard)"
    )


def _check_category(value: Any) -> Any:
    if not _is_text(value):
        raise _Rejected("Question {n} is missing the 'category' field")
    return value


OPTIONS_COUNT_RULE = FieldRule('options', _check_option_count, _pad_options)

FIELD_RULES = (
    FieldRule('question', _check_question),
    FieldRule('options', _check_options_list),
    OPTIONS_COUNT_RULE,
    FieldRule('options', _check_option_texts, _repair_option_texts),
    FieldRule('correctAnswer', _check_correct_answer, coerce_correct_answer),
    FieldRule('explanation', _check_explanation, _default_explanation),
    FieldRule('difficulty', _check_difficulty, lambda _value, _record: DEFAULT_DIFFICULTY),
    FieldRule('category', _check_category, lambda _value, _record: DEFAULT_CATEGORY),
)


def _apply_rule(rule: FieldRule, value: Any, record: QuestionRecord, index: int, strict: bool) -> Any:
    try:
        return rule.check(value)
    except _Rejected as rejection:
        message = rejection.describe(index)
        if strict or rule.repair is None:
            raise FieldValidationError(message, index=index, field=rule.field) from None
        LOGGER.warning("%s; repairing (got %r)", message, value)
        return rule.repair(value, record)


def ensure_four_options(options: List[Any], index: int, strict: bool = False) -> List[Any]:
    """Pad with placeholders or truncate to exactly four options.

    Strict mode raises FieldValidationError instead. A four-option list is
    returned unchanged.
    """
    return _apply_rule(OPTIONS_COUNT_RULE, list(options), {}, index, strict)


def validate_one(record: Any, index: int, strict: bool = False) -> QuestionRecord:
    """Validate one question-like object and return a new QuestionRecord.

    Keys not covered by the rules are carried over unchanged. The input object
    is never mutated.
    """
    if not isinstance(record, dict):
        raise FieldValidationError(
            f"Question {index + 1} is missing the 'question' field", index=index, field='question'
        )

    out: QuestionRecord = dict(record)
    for rule in FIELD_RULES:
        out[rule.field] = _apply_rule(rule, out.get(rule.field), out, index, strict)
    return out


def validate_questions(records: List[Any], strict: bool = False) -> List[QuestionRecord]:
    """Validate every record in order; strict mode stops at the first violation."""
    LOGGER.info("Validating %d questions", len(records))
    validated = [validate_one(record, index, strict) for index, record in enumerate(records)]
    LOGGER.info("Successfully validated %d questions", len(validated))
    return validated
