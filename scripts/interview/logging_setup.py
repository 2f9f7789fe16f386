"""
Logging Setup
Single stderr handler for engine diagnostics; prompts never go through logging
"""

import logging
from logging.config import dictConfig

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
}


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure logging once.

    If the root logger already has handlers (pytest, an embedding
    application) only the level is adjusted, so output is never duplicated.
    """
    root = logging.getLogger()
    if not root.handlers:
        dictConfig(_DICT_CONFIG)
    root.setLevel(level.upper())
