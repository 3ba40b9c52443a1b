"""Structured logging setup. Read-only config; no business logic."""

import logging
import sys
from typing import Any

from media_catalog.config.settings import get_settings

_NOISY_LOGGERS = (
    "urllib3",
    "httpx",
    "opensearch",
    "pymongo",
    "botocore",
    "openai",
    "sentence_transformers",
)


def configure_logging() -> None:
    """Configure stdout logging; debug mode lowers the level so boost traces are visible."""
    settings = get_settings()
    level_name = "DEBUG" if settings.debug else settings.log_level.upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Storage and embedding clients log every request at INFO
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    logging.getLogger("media_catalog").setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def log_extra(extra: dict[str, Any]) -> dict[str, Any]:
    """Build a dict suitable for logger.info(..., **log_extra(...)) for structured fields."""
    return {"extra": extra}
