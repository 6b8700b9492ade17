"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_logger and get_module_logger context binding
- Test logging suppression in test environment
"""

import logging

import pytest
import structlog

from infrastructure.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_logger,
    get_module_logger,
)


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_detects_pytest(self):
        assert _is_test_environment() is True

    def test_configure_logging_returns_bound_logger(self, mock_settings):
        result = configure_logging(settings=mock_settings)

        assert hasattr(result, "info")
        assert hasattr(result, "error")

    def test_logging_is_suppressed_under_pytest(self, mock_settings):
        configure_logging(settings=mock_settings, log_level="DEBUG")

        assert logging.root.level > logging.CRITICAL

    def test_configure_logging_without_settings(self):
        """Settings are optional in the test environment."""
        assert configure_logging() is not None


@pytest.mark.unit
class TestLoggerFactories:
    """Test suite for logger helpers."""

    def test_get_logger_binds_given_name(self):
        logger = get_logger("custom.name")

        assert structlog.get_context(logger)["logger_name"] == "custom.name"

    def test_get_logger_defaults_to_calling_module(self):
        logger = get_logger()

        assert structlog.get_context(logger)["logger_name"] == __name__

    def test_get_module_logger_binds_component(self):
        logger = get_module_logger()
        context = structlog.get_context(logger)

        assert context["module_path"] == __name__
        assert context["component"] == __name__.split(".")[-1]
