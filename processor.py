"""Quiz question generation and validation of raw Gemini output.

`validate_generated_content` is the entry point for any raw model response:
it extracts the JSON, parses it, unwraps the question list and validates every
question, raising InvalidGeneratedContentError on any failure.
"""

from __future__ import annotations

import json
import os
import time
from typing import Any, Dict, List, Optional

from core.config import GeminiConfig, get_tmp_dir, load_gemini_config
from core.errors import (
    EmptyOrNonTextError,
    ExtractionExhaustedError,
    InvalidGeneratedContentError,
    QuizGenerationError,
)
from core.logging_utils import get_logger, log_content_to_file, preview
from core.validation import QuestionRecord, validate_questions
from extraction.gemini import (
    build_repair_prompt,
    construct_prompt,
    generate_content,
    load_existing_questions,
    load_question_format,
)
from extraction.parsing import extract_candidate, parse_json_content
from extraction.shapes import to_question_array

LOGGER = get_logger()


def _require_text(content: Any) -> None:
    if not isinstance(content, str) or not content.strip():
        raise EmptyOrNonTextError()


def validate_generated_content(content: Any, strict: bool = False) -> List[QuestionRecord]:
    """Turn raw model output into validated question records.

    Args:
        content: Raw text returned by the model
        strict: Reject non-conformant questions instead of repairing them

    Returns:
        List of question dicts, each with question, options (4), correctAnswer
        (0-3), explanation, difficulty (easy/medium/hard) and category

    Raises:
        InvalidGeneratedContentError: "Content is empty or not a string",
            "Invalid generated content" when nothing JSON-like was found, or
            "Invalid generated content: <cause>" for any other failure.
    """
    try:
        _require_text(content)
    except EmptyOrNonTextError as e:
        LOGGER.error("Content validation failed: %s", e)
        raise InvalidGeneratedContentError(str(e)) from e

    LOGGER.info("Original content (first 200 chars): %s", preview(content))
    try:
        log_content_to_file(content)
    except Exception as e:
        LOGGER.warning("Failed to log full content for debugging: %s", e)

    original = content.strip()
    try:
        candidate = extract_candidate(original)
        parsed = parse_json_content(candidate, original)
        questions = to_question_array(parsed, strict)
        return validate_questions(questions, strict)
    except ExtractionExhaustedError as e:
        LOGGER.error("Content validation failed: %s", e)
        raise InvalidGeneratedContentError("Invalid generated content") from e
    except Exception as e:
        LOGGER.error("Content validation failed: %s", e)
        raise InvalidGeneratedContentError(f"Invalid generated content: {e}") from e


def save_generated_questions(questions: List[QuestionRecord], tmp_dir: Optional[str] = None) -> str:
    """Write questions to <tmp_dir>/<epoch-ms>.json and return the path."""
    directory = tmp_dir or get_tmp_dir()
    try:
        os.makedirs(directory, exist_ok=True)
        file_path = os.path.join(directory, f"{int(time.time() * 1000)}.json")
        with open(file_path, "w", encoding="utf-8") as fh:
            json.dump(questions, fh, indent=2)
    except OSError as e:
        raise QuizGenerationError(f"Failed to save generated questions: {e}") from e
    return file_path


def generate_quiz_questions(
    existing_questions_path: Optional[str] = None,
    *,
    cfg: Optional[GeminiConfig] = None,
    topic: Optional[str] = None,
    language: Optional[str] = None,
    position: Optional[str] = None,
    difficulty_text: Optional[str] = None,
    position_instruction: Optional[str] = None,
    strict: bool = False,
    save: bool = False,
) -> Dict[str, Any]:
    """Generate quiz questions with Gemini and validate them.

    If the first response cannot be validated, the model is asked once to
    repair its own output before giving up.

    Returns:
        Dict with "questions", "requestId" and, when `save` is set, "filePath"
    """
    cfg = cfg or load_gemini_config()
    request_id = str(int(time.time() * 1000))
    LOGGER.info("Starting quiz question generation (request %s)", request_id)

    try:
        question_format = load_question_format()
        existing_questions = load_existing_questions(existing_questions_path)
        LOGGER.info("Loaded %d existing questions", len(existing_questions))

        prompt = construct_prompt(
            question_format,
            existing_questions,
            topic=topic,
            language=language,
            position=position,
            difficulty_text=difficulty_text,
            position_instruction=position_instruction,
        )

        text = generate_content(prompt, cfg)
        LOGGER.info("Received response from Gemini AI (request %s)", request_id)
        try:
            questions = validate_generated_content(text, strict=strict)
        except InvalidGeneratedContentError as e:
            LOGGER.warning("Response failed validation (%s); retrying with repair prompt", e)
            repaired = generate_content(build_repair_prompt(text), cfg)
            questions = validate_generated_content(repaired, strict=strict)

        LOGGER.info("Successfully validated %d questions", len(questions))
        result: Dict[str, Any] = {"questions": questions, "requestId": request_id}
        if save:
            result["filePath"] = save_generated_questions(questions)
        return result

    except QuizGenerationError:
        raise
    except Exception as e:
        LOGGER.error("Quiz question generation failed (request %s): %s", request_id, e)
        raise QuizGenerationError(f"Failed to generate quiz questions: {e}") from e
