"""Logging module with structured formatters, location rounding, and quote context."""

from .context import ContextFilter, LogContext, log_context, log_quote_context
from .filters import DefaultContextFilter, LocationFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import get_logger, setup_logging, setup_logging_from_settings

__all__ = [
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
    "log_context",
    "log_quote_context",
    "JSONFormatter",
    "DevFormatter",
    "LocationFilter",
    "DefaultContextFilter",
    "LogContext",
    "ContextFilter",
]
