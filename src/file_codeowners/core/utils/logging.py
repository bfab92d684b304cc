"""
Structured logging utilities.

Provides logging setup plus a context manager for structured operation
logging with timing, error tracking, and metadata.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator  # noqa: TCH003
from contextlib import contextmanager
from typing import Any

import structlog

from file_codeowners.core.config.logging_config import LoggingConfig  # noqa: TCH001

logger = structlog.get_logger(__name__)


def configure_logging(logging_config: LoggingConfig) -> None:
    """
    Configure stdlib logging and structlog from a LoggingConfig.

    Args:
        logging_config: Level, renderer ("console" or "json") and optional log file.
    """
    level = getattr(logging, logging_config.level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if logging_config.file_path:
        handlers.append(logging.FileHandler(logging_config.file_path, encoding="utf-8"))

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    renderer: Any
    if logging_config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


@contextmanager
def log_operation(operation: str, **context: Any) -> Iterator[None]:
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        **context: Additional context to include in logs

    Example:
        with log_operation("parse_codeowners", path=path):
            codeowners = Codeowners.parse_from_filepath(path)
    """
    start_time = time.time()
    logger.debug("operation_started", operation=operation, **context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.error(
            "operation_failed",
            operation=operation,
            error=str(e),
            latency_ms=latency_ms,
            exc_info=True,
            **context,
        )
        raise
    else:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.info("operation_completed", operation=operation, latency_ms=latency_ms, **context)

