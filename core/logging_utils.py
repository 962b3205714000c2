"""Logging utilities for safe API key handling and raw content debugging."""

import logging
import os
from datetime import datetime, timezone
from typing import Optional

from core.config import get_debug_log_dir

DEBUG_CONTENT_LOG_NAME = "gemini-content-debug.log"


def get_logger() -> logging.Logger:
    """Get or create the application logger."""
    logger = logging.getLogger("quizgen")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    log_path = os.path.join(os.getcwd(), "quizgen.log")

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    # Also emit to console (shows up in Streamlit logs)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(fmt)
    logger.addHandler(stream_handler)

    return logger


def preview(text: str, limit: int = 200) -> str:
    """Return the first `limit` characters of text for log lines."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def log_content_to_file(content: str, log_dir: Optional[str] = None) -> str:
    """Append the full raw model output to the debug content log.

    Each entry is prefixed with an ISO-8601 UTC timestamp. Returns the log
    file path. Raises OSError if the directory or file cannot be written;
    callers treat this log as best-effort.
    """
    directory = log_dir or get_debug_log_dir()
    os.makedirs(directory, exist_ok=True)
    log_path = os.path.join(directory, DEBUG_CONTENT_LOG_NAME)

    timestamp = datetime.now(timezone.utc).isoformat()
    with open(log_path, "a", encoding="utf-8", errors="backslashreplace") as fh:
        fh.write(f"[{timestamp}] FULL CONTENT:\n{content}\n\n")
    return log_path


def safe_key_fingerprint(key: str) -> str:
    """Return a safe fingerprint of an API key for logging (never the full key)."""
    if not isinstance(key, str) or not key:
        return "<empty>"
    tail = key[-4:] if len(key) >= 4 else key
    return f"len={len(key)} tail=***{tail}"


def looks_like_auth_error(message: str) -> bool:
    """Check if an error message suggests an authentication/API key problem."""
    m = (message or "").lower()
    return any(
        s in m
        for s in [
            "api key",
            "invalid api key",
            "invalid key",
            "unauthorized",
            "permission denied",
            "forbidden",
            "401",
            "403",
        ]
    )
