"""Structured logging configuration using ``structlog``.

Call :func:`setup_logging` once at application startup.  The terminal is
owned by the UI, so events go to a log file rather than stdout.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog


def setup_logging(log_level: str = "INFO", log_path: Path | None = None) -> TextIO | None:
    """Configure structured logging for the application.

    Args:
        log_level: Minimum severity level (e.g. ``"DEBUG"``, ``"INFO"``).
        log_path: File to append events to.  ``None`` writes to stderr so the
            output of the non-interactive commands stays clean.

    Returns:
        The opened log file handle, or ``None`` when logging to stderr.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    stream: TextIO | None = None
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        stream = log_path.open("a", encoding="utf-8")

    # Standard-library root logger (httpx logs through it)
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=numeric_level,
        force=True,
    )

    logger_factory = (
        structlog.WriteLoggerFactory(file=stream)
        if stream is not None
        else structlog.PrintLoggerFactory(sys.stderr)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )
    return stream
