"""Logging helpers for the bank resampler."""
from __future__ import annotations

import logging
import sys
from typing import Iterable

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", extra_handlers: Iterable[logging.Handler] | None = None) -> None:
    """Configure root logging to stderr so stdout stays free for reports."""

    logging_level = getattr(logging, level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging_level)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    handlers = [console_handler]
    if extra_handlers:
        handlers.extend(extra_handlers)

    logging.basicConfig(
        level=logging_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=handlers,
        force=True,
    )


__all__ = ["configure_logging"]
