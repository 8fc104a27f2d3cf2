"""Logging setup and configuration."""

import logging
import sys
from typing import TextIO

from .context import ContextFilter
from .filters import DefaultContextFilter, LocationFilter
from .formatters import DevFormatter, JSONFormatter


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
    coordinate_decimals: int = 2,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Configure the root logger and return the installed handler.

    Filters run in order: quote context first, then "-" defaults for the
    fields it did not set, then coordinate rounding.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter(environment) if json_output else DevFormatter())
    handler.addFilter(ContextFilter())
    handler.addFilter(DefaultContextFilter())
    handler.addFilter(LocationFilter(coordinate_decimals))

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    logging.getLogger("shapely").setLevel(logging.WARNING)
    return handler


def setup_logging_from_settings(settings) -> logging.Handler:
    """Configure logging from a loaded Settings object."""
    return setup_logging(
        level=settings.logging.level,
        json_output=settings.logging.format == "json",
        environment=settings.logging.environment,
        coordinate_decimals=settings.logging.coordinate_decimals,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)
