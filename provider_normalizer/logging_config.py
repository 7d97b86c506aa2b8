"""
Logging Setup

Opt-in entry point for applications embedding the normalizer. The library
itself only emits through module loggers and never configures handlers.
"""

import logging
import logging.config
from typing import Optional, Union

from provider_normalizer.config import get_settings


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure the normalizer log format.

    Args:
        level: Log level for the provider_normalizer logger; defaults to
            DEBUG when settings.DEBUG is on, INFO otherwise
    """
    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.DEBUG else "INFO"
    elif isinstance(level, int):
        level = logging.getLevelName(level)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "normalizer": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "normalizer_console": {
                "class": "logging.StreamHandler",
                "formatter": "normalizer",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "provider_normalizer": {
                "handlers": ["normalizer_console"],
                "level": level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)
