"""Unit tests for structlog configuration."""

import io
import logging
from unittest.mock import MagicMock

import pytest
import structlog

from infrastructure.logging import _resolve_level, configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def _bound_logger():
    """Build a logger from the configured wrapper class around a mock sink."""
    sink = MagicMock()
    wrapper_class = structlog.get_config()["wrapper_class"]
    return wrapper_class(sink, processors=[], context={}), sink


class TestResolveLevel:
    """Tests for LOG_LEVEL parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, logging.INFO),
            ("", logging.INFO),
            ("debug", logging.DEBUG),
            (" WARNING ", logging.WARNING),
            ("verbose", logging.INFO),
        ],
    )
    def test_maps_names_to_levels(self, raw, expected):
        assert _resolve_level(raw) == expected


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_renderer_without_color(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr("sys.stdout", io.StringIO())

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_when_color_forced(self, monkeypatch):
        monkeypatch.setenv("FORCE_COLOR", "1")

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_level_filters_lower_events(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        configure_logging()
        logger, sink = _bound_logger()
        logger.info("employee_created")
        logger.error("employee_storage_failed")

        sink.info.assert_not_called()
        sink.error.assert_called_once()
