"""
Tests for processor

Test Coverage:
- validate_generated_content(): end-to-end extraction, shapes, modes, errors
- Debug content log: written, and failures swallowed
- generate_quiz_questions(): prompt -> model -> validation, repair retry, save
- save_generated_questions(): JSON file output
"""

import json

import pytest

import processor
from core.config import GeminiConfig
from core.errors import (
    ExtractionExhaustedError,
    InvalidGeneratedContentError,
    QuizGenerationError,
    ShapeError,
)
from extraction.gemini import REPAIR_TO_JSON_PROMPT_TEMPLATE
from processor import generate_quiz_questions, save_generated_questions, validate_generated_content


@pytest.mark.parametrize("strict", [True, False])
def test_valid_array_returned_unchanged(questions, strict):
    assert validate_generated_content(json.dumps(questions), strict=strict) == questions


@pytest.mark.parametrize("strict", [True, False])
def test_fenced_array_with_prose(questions, strict):
    raw = f"Here are your questions:\n```json\n{json.dumps(questions, indent=2)}\n```\nEnjoy!"

    assert validate_generated_content(raw, strict=strict) == questions


def test_wrapper_object_after_prose_is_recovered(questions):
    raw = "Sure! " + json.dumps({"questions": questions}) + " Good luck."

    assert validate_generated_content(raw) == questions


def test_single_question_object_lenient(question):
    assert validate_generated_content(json.dumps(question)) == [question]


def test_single_question_object_strict(question):
    with pytest.raises(InvalidGeneratedContentError) as exc_info:
        validate_generated_content(json.dumps(question), strict=True)

    assert str(exc_info.value).startswith("Invalid generated content: ")
    assert isinstance(exc_info.value.__cause__, ShapeError)


def test_sparse_question_repaired_in_lenient_mode():
    raw = '[{"question":"Q?","options":["A","B"],"correctAnswer":"1","difficulty":"HARD"}]'

    [record] = validate_generated_content(raw)

    assert record["options"] == ["A", "B", "Option 3 (placeholder)", "Option 4 (placeholder)"]
    assert record["correctAnswer"] == 1
    assert record["difficulty"] == "hard"
    assert record["category"] == "General"
    assert record["explanation"] == "The correct answer is option 2."


def test_strict_field_error_message():
    raw = '[{"question":"Q?","options":["A","B"],"correctAnswer":1}]'

    with pytest.raises(InvalidGeneratedContentError) as exc_info:
        validate_generated_content(raw, strict=True)

    assert str(exc_info.value) == "Invalid generated content: Question 1 must have exactly 4 options"


@pytest.mark.parametrize("strict", [True, False])
def test_plain_text_has_no_cause_suffix(strict):
    with pytest.raises(InvalidGeneratedContentError) as exc_info:
        validate_generated_content("plain text with no JSON and no array", strict=strict)

    assert str(exc_info.value) == "Invalid generated content"
    assert isinstance(exc_info.value.__cause__, ExtractionExhaustedError)


def test_unparseable_json_reports_parse_error():
    with pytest.raises(InvalidGeneratedContentError) as exc_info:
        validate_generated_content('[{"question": "Q"')

    message = str(exc_info.value)
    assert message.startswith("Invalid generated content: ")
    assert len(message) > len("Invalid generated content: ")


def test_unrecognized_shape_message():
    with pytest.raises(InvalidGeneratedContentError, match="not an array of questions"):
        validate_generated_content('{"title": "Quiz"}')


@pytest.mark.parametrize("content", [123, None, "", "   \n", ["[]"]])
def test_empty_or_non_text_content(content):
    with pytest.raises(InvalidGeneratedContentError) as exc_info:
        validate_generated_content(content)

    assert str(exc_info.value) == "Content is empty or not a string"


def test_raw_content_is_logged_to_debug_file(questions, debug_log_dir):
    raw = json.dumps(questions)

    validate_generated_content(raw)

    logged = (debug_log_dir / "gemini-content-debug.log").read_text(encoding="utf-8")
    assert "FULL CONTENT:" in logged
    assert raw in logged


def test_debug_log_failure_is_only_a_warning(questions, monkeypatch, caplog):
    def broken_sink(content):
        raise OSError("disk full")

    monkeypatch.setattr(processor, "log_content_to_file", broken_sink)

    assert validate_generated_content(json.dumps(questions)) == questions
    assert any("Failed to log full content" in r.getMessage() for r in caplog.records)


def test_debug_log_non_os_failure_is_only_a_warning(questions, monkeypatch, caplog):
    def broken_sink(content):
        raise UnicodeEncodeError("utf-8", content, 0, 1, "surrogates not allowed")

    monkeypatch.setattr(processor, "log_content_to_file", broken_sink)

    assert validate_generated_content(json.dumps(questions)) == questions
    assert any("Failed to log full content" in r.getMessage() for r in caplog.records)


def test_lone_surrogate_in_content_is_logged_escaped(questions, debug_log_dir):
    raw = json.dumps(questions) + "\ud800"

    assert validate_generated_content(raw) == questions

    logged = (debug_log_dir / "gemini-content-debug.log").read_text(encoding="utf-8")
    assert "\\ud800" in logged


def test_array_after_prose_with_braces(questions):
    raw = "Here are the questions {as requested}:\n" + json.dumps(questions) + "\nEnjoy!"

    assert validate_generated_content(raw) == questions


class FakeModel:
    """Stands in for extraction.gemini.generate_content."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def __call__(self, prompt, cfg):
        self.prompts.append(prompt)
        return self.responses.pop(0)


@pytest.fixture
def cfg():
    return GeminiConfig(api_key="test-key", retry_delay=0.0)


def test_generate_quiz_questions(questions, monkeypatch, cfg):
    fake = FakeModel(f"```json\n{json.dumps(questions)}\n```")
    monkeypatch.setattr(processor, "generate_content", fake)

    result = generate_quiz_questions(cfg=cfg, topic="Python")

    assert result["questions"] == questions
    assert result["requestId"]
    assert "filePath" not in result
    assert 'the topic of "Python"' in fake.prompts[0]


def test_generate_quiz_questions_retries_with_repair_prompt(questions, monkeypatch, cfg):
    fake = FakeModel("I could not produce JSON, sorry.", json.dumps(questions))
    monkeypatch.setattr(processor, "generate_content", fake)

    result = generate_quiz_questions(cfg=cfg)

    assert result["questions"] == questions
    assert fake.prompts[1].startswith(REPAIR_TO_JSON_PROMPT_TEMPLATE)
    assert "I could not produce JSON, sorry." in fake.prompts[1]


def test_generate_quiz_questions_gives_up_after_repair(monkeypatch, cfg):
    fake = FakeModel("no json", "still no json")
    monkeypatch.setattr(processor, "generate_content", fake)

    with pytest.raises(QuizGenerationError) as exc_info:
        generate_quiz_questions(cfg=cfg)

    assert str(exc_info.value) == "Failed to generate quiz questions: Invalid generated content"


def test_generate_quiz_questions_saves_file(questions, monkeypatch, tmp_path, cfg):
    monkeypatch.setenv("GEMINI_TMP_DIR", (tmp_path / "out").as_posix())
    monkeypatch.setattr(processor, "generate_content", FakeModel(json.dumps(questions)))

    result = generate_quiz_questions(cfg=cfg, save=True)

    with open(result["filePath"], encoding="utf-8") as fh:
        assert json.load(fh) == questions


def test_save_generated_questions(questions, tmp_path):
    path = save_generated_questions(questions, tmp_dir=tmp_path.as_posix())

    assert path.endswith(".json")
    with open(path, encoding="utf-8") as fh:
        assert json.load(fh) == questions
