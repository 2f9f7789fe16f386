"""
Interview Configuration
Runtime settings read from the environment (and .env files via python-dotenv)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_CANCEL_WORDS = ["quit", "exit"]


@dataclass
class InterviewConfig:
    """Settings shared by the engine, the console backend and the CLI."""
    max_attempts: Optional[int] = None       # None = re-ask until valid
    cancel_words: List[str] = field(default_factory=lambda: list(DEFAULT_CANCEL_WORDS))
    list_separator: str = ","
    log_level: str = "WARNING"


def load_env_files(*extra: Path) -> None:
    """Load ~/.env, then ./.env and any extra files; existing variables win."""
    load_dotenv(Path.home() / ".env")
    load_dotenv(Path.cwd() / ".env")
    for path in extra:
        load_dotenv(path)


def load_config(environ: Optional[Mapping[str, str]] = None) -> InterviewConfig:
    """
    Build an InterviewConfig from environment variables.

    Reads INTERVIEW_MAX_ATTEMPTS, INTERVIEW_CANCEL_WORDS (comma separated),
    INTERVIEW_LIST_SEPARATOR and INTERVIEW_LOG_LEVEL. Unset or blank
    variables keep their defaults.

    Raises:
        ValueError: INTERVIEW_MAX_ATTEMPTS is not a positive integer
    """
    env = os.environ if environ is None else environ
    config = InterviewConfig()

    raw_attempts = env.get("INTERVIEW_MAX_ATTEMPTS", "").strip()
    if raw_attempts:
        try:
            config.max_attempts = int(raw_attempts)
        except ValueError:
            raise ValueError(
                f"INTERVIEW_MAX_ATTEMPTS must be an integer, got {raw_attempts!r}"
            ) from None
        if config.max_attempts < 1:
            raise ValueError("INTERVIEW_MAX_ATTEMPTS must be at least 1")

    raw_words = env.get("INTERVIEW_CANCEL_WORDS", "").strip()
    if raw_words:
        config.cancel_words = [w.strip().lower() for w in raw_words.split(",") if w.strip()]

    separator = env.get("INTERVIEW_LIST_SEPARATOR", "")
    if separator.strip():
        config.list_separator = separator.strip()

    level = env.get("INTERVIEW_LOG_LEVEL", "").strip()
    if level:
        config.log_level = level.upper()

    return config
