"""Application configuration and session state management."""

import os
import tempfile
from dataclasses import dataclass
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


DEFAULT_MODEL_NAME = "gemini-2.0-flash"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 4096
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0

DEFAULT_PROMPT_TEMPLATE = """
Generate 10 unique multiple-choice technical interview questions for software developers on {topic}.
{language}{positionInstruction}The questions should demonstrate {difficultyText}.

Return ONLY a JSON array of question objects matching this schema:
{schema}

Example:
{example}

Do not repeat any of these existing questions:
{existingQuestions}
""".strip()


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    model_name: str = DEFAULT_MODEL_NAME
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, ''))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, ''))
    except ValueError:
        return default


def load_gemini_config(api_key: Optional[str] = None) -> GeminiConfig:
    """Build a GeminiConfig from the environment, with an optional key override."""
    return GeminiConfig(
        api_key=api_key if api_key is not None else os.getenv('GEMINI_API_KEY', ''),
        model_name=os.getenv('GEMINI_MODEL') or DEFAULT_MODEL_NAME,
        temperature=_env_float('GEMINI_TEMPERATURE', DEFAULT_TEMPERATURE),
        max_output_tokens=_env_int('GEMINI_MAX_OUTPUT_TOKENS', DEFAULT_MAX_OUTPUT_TOKENS),
        max_retries=max(1, _env_int('GEMINI_MAX_RETRIES', DEFAULT_MAX_RETRIES)),
        retry_delay=max(0.0, _env_float('GEMINI_RETRY_DELAY', DEFAULT_RETRY_DELAY)),
    )


def get_debug_log_dir() -> str:
    """Directory receiving the raw content debug log."""
    return os.getenv('QUIZGEN_LOG_DIR') or os.path.join(os.getcwd(), 'logs')


def get_tmp_dir() -> str:
    return os.getenv('GEMINI_TMP_DIR') or tempfile.gettempdir()


def get_prompt_template() -> str:
    return os.getenv('AI_QUIZ_PROMPT_TEMPLATE') or DEFAULT_PROMPT_TEMPLATE


def get_session_state_defaults() -> Dict[str, Any]:
    """Return default values for all session state variables."""
    cfg = load_gemini_config()
    return {
        # Results storage
        'raw_content': '',
        'questions': None,
        'validation_error': None,
        'source_name': None,
        'request_id': None,

        # Validation settings
        'strict_mode': False,

        # API configuration
        'api_key_valid': False,
        'api_key': cfg.api_key,

        # Model settings
        'model_name': cfg.model_name,
        'temperature': cfg.temperature,
        'max_tokens': cfg.max_output_tokens,

        # Generation options
        'topic': '',
        'language': '',
        'difficulty_text': '',
        'existing_questions_path': '',
    }


def initialize_session_state() -> None:
    """Initialize all session state variables with default values."""
    import streamlit as st

    defaults = get_session_state_defaults()

    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value
