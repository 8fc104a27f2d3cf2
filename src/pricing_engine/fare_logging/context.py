"""Task-local logging context for adding fields to log records."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_context: ContextVar[dict[str, Any] | None] = ContextVar("pricing_log_context", default=None)


class LogContext:
    """Context-variable storage for log context fields.

    Each asyncio task sees its own copy, so concurrent quotes never
    leak fields into each other's records.
    """

    @classmethod
    def set(cls, **kwargs: Any) -> None:
        _context.set({**cls.get(), **kwargs})

    @classmethod
    def get(cls) -> dict[str, Any]:
        return _context.get() or {}

    @classmethod
    def clear(cls) -> None:
        _context.set({})


class ContextFilter(logging.Filter):
    """Injects LogContext fields into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Context manager that sets logging context fields.

    Fields are injected into log records via ContextFilter, which must
    be attached to the handler (see setup_logging). The previous context
    is restored on exit, so nested blocks compose.
    """
    token = _context.set({**LogContext.get(), **kwargs})
    try:
        yield
    finally:
        _context.reset(token)


@contextmanager
def log_quote_context(quote_id: str, **kwargs: Any) -> Iterator[None]:
    """Convenience context manager for quote calculations."""
    correlation_id = kwargs.pop("correlation_id", quote_id)
    with log_context(quote_id=quote_id, correlation_id=correlation_id, **kwargs):
        yield
