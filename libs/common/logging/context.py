"""Reconciliation ID generation and context propagation.

Every reconciliation pass gets a reconcile ID so that all logs emitted while
loading, mutating and saving one cluster's remote API keys can be grouped.

Reconcile IDs are UUIDv4 strings stored in a context variable.

Example:
    >>> from libs.common.logging.context import ReconcileContext, get_reconcile_id
    >>> with ReconcileContext() as reconcile_id:
    ...     get_reconcile_id() == reconcile_id
    True
"""

import contextvars
import uuid
from types import TracebackType

_reconcile_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "reconcile_id", default=None
)


def generate_reconcile_id() -> str:
    """Generate a new unique reconcile ID (UUID v4 string)."""
    return str(uuid.uuid4())


def get_reconcile_id() -> str | None:
    """Get the current reconcile ID, or None if no pass is in progress."""
    return _reconcile_id_var.get()


def set_reconcile_id(reconcile_id: str) -> None:
    """Set the reconcile ID for the current context.

    Raises:
        ValueError: If reconcile_id is empty or None
    """
    if not reconcile_id:
        raise ValueError("Reconcile ID cannot be empty")
    _reconcile_id_var.set(reconcile_id)


def clear_reconcile_id() -> None:
    """Clear the reconcile ID from the current context."""
    _reconcile_id_var.set(None)


class ReconcileContext:
    """Context manager scoping a reconcile ID to one reconciliation pass.

    The previous reconcile ID (if any) is restored on exit.

    Args:
        reconcile_id: The reconcile ID to set. If None, generates a new one.

    Example:
        >>> with ReconcileContext("pass-123"):
        ...     print(get_reconcile_id())
        pass-123
    """

    def __init__(self, reconcile_id: str | None = None) -> None:
        self.reconcile_id = reconcile_id or generate_reconcile_id()
        self.previous_reconcile_id: str | None = None

    def __enter__(self) -> str:
        self.previous_reconcile_id = get_reconcile_id()
        set_reconcile_id(self.reconcile_id)
        return self.reconcile_id

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self.previous_reconcile_id is not None:
            set_reconcile_id(self.previous_reconcile_id)
        else:
            clear_reconcile_id()
