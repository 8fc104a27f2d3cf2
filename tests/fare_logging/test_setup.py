"""Tests for logging setup."""

import io
import logging

import pytest

from pricing_engine.fare_logging import (
    ContextFilter,
    DefaultContextFilter,
    DevFormatter,
    JSONFormatter,
    LocationFilter,
    get_logger,
    log_quote_context,
    setup_logging,
    setup_logging_from_settings,
)
from pricing_engine.settings import LoggingSettings, Settings


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers.copy()
    original_level = root_logger.level
    yield root_logger
    root_logger.handlers = original_handlers
    root_logger.setLevel(original_level)


@pytest.mark.unit
class TestSetupLogging:
    def test_configures_single_handler(self, restore_root_logger):
        setup_logging()

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, DevFormatter)

    def test_json_output(self, restore_root_logger):
        setup_logging(level="DEBUG", json_output=True, environment="production")

        handler = restore_root_logger.handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)
        assert handler.formatter.environment == "production"
        assert restore_root_logger.level == logging.DEBUG

    def test_filter_order(self, restore_root_logger):
        setup_logging()

        filter_types = [type(f) for f in restore_root_logger.handlers[0].filters]
        assert filter_types == [ContextFilter, DefaultContextFilter, LocationFilter]

    def test_quote_context_and_rounded_point_in_output(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(stream=stream)
        logger = logging.getLogger("pricing_engine.geo.resolver")

        with log_quote_context("quote-3"):
            logger.info("Point (55.364412, 25.253201) resolved to regions ['dxb']")
        logger.info("Outside any quote")

        first, second = stream.getvalue().splitlines()
        assert "[quote=quote-3 corr=quote-3]" in first
        assert "(55.36, 25.25)" in first
        assert "[quote=- corr=-]" in second

    def test_suppresses_shapely_logger(self, restore_root_logger):
        setup_logging(level="DEBUG")
        assert logging.getLogger("shapely").level >= logging.WARNING

    def test_from_settings(self, restore_root_logger):
        settings = Settings(
            logging=LoggingSettings(level="WARNING", format="json", coordinate_decimals=4)
        )

        handler = setup_logging_from_settings(settings)

        assert restore_root_logger.level == logging.WARNING
        assert restore_root_logger.handlers == [handler]
        assert isinstance(handler.formatter, JSONFormatter)
        assert handler.filters[-1].decimals == 4


@pytest.mark.unit
class TestGetLogger:
    def test_returns_named_logger(self):
        logger = get_logger("pricing_engine.test")

        assert logger.name == "pricing_engine.test"
        assert isinstance(logger, logging.Logger)
