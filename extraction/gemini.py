"""Gemini request utilities for quiz question generation.

This module builds the generation prompt and sends it to Gemini. The raw text
that comes back is untrusted; `processor.validate_generated_content` turns it
into question records.
"""

from __future__ import annotations

import json
import os
import time
from typing import Any, Dict, List, Optional

import google.generativeai as genai

from core.config import GeminiConfig, get_prompt_template
from core.errors import GeminiRequestError
from core.logging_utils import get_logger, safe_key_fingerprint

LOGGER = get_logger()


DEFAULT_QUESTION_FORMAT: Dict[str, Any] = {
    "schema": {
        "type": "array",
        "items": {
            "type": "object",
            "required": ["question", "options", "correctAnswer", "explanation", "difficulty", "category"],
            "properties": {
                "question": {"type": "string"},
                "options": {"type": "array", "items": {"type": "string"}, "minItems": 4, "maxItems": 4},
                "correctAnswer": {"type": "integer", "minimum": 0, "maximum": 3},
                "explanation": {"type": "string"},
                "difficulty": {"type": "string", "enum": ["easy", "medium", "hard"]},
                "category": {"type": "string"},
            },
        },
    },
    "example": [
        {
            "question": "What does the 'yield' keyword do in a Python function?",
            "options": [
                "It returns a value and terminates the function",
                "It turns the function into a generator",
                "It pauses the interpreter",
                "It declares a global variable",
            ],
            "correctAnswer": 1,
            "explanation": "A function containing 'yield' returns a generator object when called.",
            "difficulty": "medium",
            "category": "Python",
        }
    ],
}


REPAIR_TO_JSON_PROMPT_TEMPLATE = """
You returned output that was not a valid JSON array of quiz questions.

Task:
Convert the text below into ONE valid JSON array where every element has this shape:

{
    "question": "...",
    "options": ["...", "...", "...", "..."],
    "correctAnswer": 0,
    "explanation": "...",
    "difficulty": "easy | medium | hard",
    "category": "..."
}

Rules:
- Return ONLY valid JSON. No markdown. No extra text.
- Exactly 4 options per question.
- correctAnswer is the 0-based index of the correct option.

Text to convert:
""".strip()


def load_question_format(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the schema/example pair embedded in the prompt.

    Uses `path`, then QUIZGEN_QUESTION_FORMAT_PATH, then the built-in format.
    """
    format_path = path or os.getenv("QUIZGEN_QUESTION_FORMAT_PATH")
    if not format_path:
        return DEFAULT_QUESTION_FORMAT
    try:
        with open(format_path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as e:
        raise ValueError(f"Failed to load question format: {e}") from e


def load_existing_questions(path: Optional[str]) -> List[str]:
    """Read previously generated questions, one per line, to avoid duplicates."""
    if not path or not os.path.exists(path):
        return []
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return [line.strip() for line in fh if line.strip()]
    except OSError as e:
        raise ValueError(f"Failed to load existing questions: {e}") from e


def construct_prompt(
    question_format: Dict[str, Any],
    existing_questions: List[str],
    *,
    topic: Optional[str] = None,
    language: Optional[str] = None,
    position: Optional[str] = None,
    difficulty_text: Optional[str] = None,
    position_instruction: Optional[str] = None,
) -> str:
    """Fill the prompt template for one generation request.

    `position` is only logged; the template addresses the position through
    `position_instruction`.
    """
    topic_instruction = f'the topic of "{topic}"' if topic else "various software development topics"
    language_instruction = f'Focus on the "{language}" programming language. ' if language else ""
    difficulty = difficulty_text or "various difficulty levels"
    position_part = f"{position_instruction}. " if position_instruction else ""
    existing = "\n".join(f"- {q}" for q in existing_questions)

    LOGGER.info(
        "Constructing prompt: topic=%s language=%s position=%s difficulty=%s",
        topic, language, position, difficulty,
    )

    prompt = get_prompt_template()
    for placeholder, value in (
        ("{topic}", topic_instruction),
        ("{language}", language_instruction),
        ("{difficultyText}", difficulty),
        ("{positionInstruction}", position_part),
        ("{schema}", json.dumps(question_format.get("schema"))),
        ("{existingQuestions}", existing),
        ("{example}", json.dumps(question_format.get("example"), indent=2)),
    ):
        prompt = prompt.replace(placeholder, value, 1)
    return prompt


def build_repair_prompt(text: str) -> str:
    return f"{REPAIR_TO_JSON_PROMPT_TEMPLATE}\n\n{text}\n"


def _response_text(resp: Any) -> str:
    try:
        text = getattr(resp, "text", None)
    except ValueError:
        # The SDK raises when the candidate was blocked or has no parts.
        text = None
    return text or ""


def generate_content(prompt: str, cfg: GeminiConfig) -> str:
    """Send `prompt` to Gemini and return the raw response text.

    Makes `cfg.max_retries` attempts (at least one), sleeping `cfg.retry_delay`
    seconds between them.
    """
    if not cfg.api_key:
        raise ValueError("Missing GEMINI_API_KEY")

    genai.configure(api_key=cfg.api_key)
    generation_config: Dict[str, Any] = {
        "temperature": float(cfg.temperature),
        "max_output_tokens": int(cfg.max_output_tokens),
    }
    model = genai.GenerativeModel(model_name=cfg.model_name, generation_config=generation_config)

    last_error: Optional[Exception] = None
    attempts = max(1, cfg.max_retries)
    for attempt in range(1, attempts + 1):
        try:
            resp = model.generate_content(prompt)
            text = _response_text(resp)
            if text:
                return text
            last_error = GeminiRequestError("Unexpected response structure from Gemini API")
        except Exception as e:
            last_error = e
        LOGGER.warning(
            "Gemini request attempt %d/%d failed (model=%s key=%s): %s",
            attempt, attempts, cfg.model_name, safe_key_fingerprint(cfg.api_key), last_error,
        )
        if attempt < attempts:
            time.sleep(cfg.retry_delay)

    raise GeminiRequestError(f"Failed to generate content from Gemini API: {last_error}") from last_error
