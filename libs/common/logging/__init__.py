"""Centralized structured logging library.

This package provides structured JSON logging with reconcile ID support
so every log line of one reconciliation pass can be correlated.

Usage:
    # At startup
    from libs.common.logging import configure_logging
    configure_logging(service_name="remote-cluster-keys", log_level="INFO")

    # Around a reconciliation pass
    from libs.common.logging import ReconcileContext, get_logger, log_with_context
    with ReconcileContext():
        logger = get_logger(__name__)
        log_with_context(logger, "INFO", "Reconciling", es_name="quickstart")
"""

from libs.common.logging.config import (
    ReconcileIDFilter,
    configure_logging,
    get_logger,
    log_with_context,
)
from libs.common.logging.context import (
    ReconcileContext,
    clear_reconcile_id,
    generate_reconcile_id,
    get_reconcile_id,
    set_reconcile_id,
)
from libs.common.logging.formatter import JSONFormatter

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "log_with_context",
    "ReconcileIDFilter",
    # Reconcile ID management
    "generate_reconcile_id",
    "get_reconcile_id",
    "set_reconcile_id",
    "clear_reconcile_id",
    "ReconcileContext",
    # Formatter (for advanced usage)
    "JSONFormatter",
]
