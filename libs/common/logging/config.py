"""Centralized logging configuration.

Sets up structured JSON output with reconcile ID injection. Entry points
call configure_logging() once at startup; library modules only use
``logging.getLogger(__name__)``.

Example:
    >>> from libs.common.logging.config import configure_logging
    >>> logger = configure_logging(service_name="remote-cluster-keys", log_level="DEBUG")
    >>> logger.info("Started", extra={"context": {"backend": "kubernetes"}})
"""

import logging
import sys
from typing import IO

from libs.common.logging.context import get_reconcile_id
from libs.common.logging.formatter import JSONFormatter


class ReconcileIDFilter(logging.Filter):
    """Logging filter that stamps the current reconcile ID on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.reconcile_id = get_reconcile_id()
        return True


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    include_context: bool = True,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure structured JSON logging on the root logger.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        service_name: Name stamped on every record (e.g., "remote-cluster-keys")
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            DEBUG shows skipped credential settings and missing Secrets.
        include_context: Whether to include context dict in output
        stream: Output stream (default: stdout)

    Returns:
        Configured root logger instance

    Raises:
        ValueError: If log_level is invalid
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        JSONFormatter(
            service_name=service_name,
            include_context=include_context,
        )
    )
    handler.addFilter(ReconcileIDFilter())

    root_logger.addHandler(handler)

    # The kubernetes client logs request bodies (Secret data) at DEBUG.
    logging.getLogger("kubernetes").setLevel(max(numeric_level, logging.INFO))

    return root_logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance (root logger when name is None)."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context_fields: object,
) -> None:
    """Log a message with context fields nested under "context".

    Example:
        >>> log_with_context(logger, "INFO", "Saved keys", es_name="quickstart", aliases=2)
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra={"context": context_fields})
