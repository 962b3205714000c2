import copy
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path so the top-level packages import
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())


WELL_FORMED_QUESTION = {
    "question": "Which keyword defines a function in Python?",
    "options": ["func", "def", "lambda", "fn"],
    "correctAnswer": 1,
    "explanation": "Functions are defined with the 'def' statement.",
    "difficulty": "easy",
    "category": "Python",
}


@pytest.fixture(autouse=True)
def debug_log_dir(tmp_path, monkeypatch):
    """Keep the raw content debug log out of the working directory."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("QUIZGEN_LOG_DIR", log_dir.as_posix())
    monkeypatch.delenv("AI_QUIZ_PROMPT_TEMPLATE", raising=False)
    monkeypatch.delenv("QUIZGEN_QUESTION_FORMAT_PATH", raising=False)
    return log_dir


@pytest.fixture
def question():
    """Return a fresh, fully valid question record."""
    return copy.deepcopy(WELL_FORMED_QUESTION)


@pytest.fixture
def questions(question):
    second = copy.deepcopy(question)
    second["question"] = "What does len([]) return?"
    second["options"] = ["None", "0", "1", "An error"]
    second["correctAnswer"] = 1
    second["difficulty"] = "medium"
    return [question, second]
