"""Unit tests for structured logging functionality."""

import json
import logging

import pytest

from live_events.shared.logging_config import AWS_SDK_LOGGERS, configure_structured_logging
from live_events.shared.logging_utils import (
    StructuredLogger,
    get_structured_logger,
)


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_generate_correlation_id(self):
        """Test correlation ID generation."""
        logger = get_structured_logger("test")
        corr_id = logger.generate_correlation_id()

        assert corr_id.startswith("CORR_")
        assert len(corr_id) == 17  # CORR_ + 12 hex chars

    def test_custom_correlation_prefix(self):
        """Test correlation IDs with a custom prefix."""
        logger = get_structured_logger("test", correlation_prefix="LEW")

        assert logger.generate_correlation_id().startswith("LEW_")

    def test_set_and_clear_correlation_id(self):
        """Test setting and clearing correlation IDs."""
        logger = get_structured_logger("test")

        assert logger._correlation_id is None

        logger.set_correlation_id("TEST_123")
        assert logger._correlation_id == "TEST_123"

        logger.clear_correlation_id()
        assert logger._correlation_id is None

    def test_structured_log_format(self, caplog):
        """Test that logs are formatted as JSON with correct fields."""
        logger = get_structured_logger("test.module")
        logger.set_correlation_id("TEST_CORR_123")

        with caplog.at_level(logging.INFO):
            logger.info("Test message", key1="value1", key2=42)

        assert len(caplog.records) == 1

        log_data = json.loads(caplog.records[0].message)

        assert log_data["level"] == "INFO"
        assert log_data["message"] == "Test message"
        assert log_data["correlation_id"] == "TEST_CORR_123"
        assert "timestamp" in log_data
        assert log_data["context"] == {"key1": "value1", "key2": 42}

    def test_log_without_correlation_id(self, caplog):
        """Test logging without a correlation ID set."""
        logger = get_structured_logger("test.module")

        with caplog.at_level(logging.INFO):
            logger.info("Test message without correlation")

        log_data = json.loads(caplog.records[0].message)

        assert log_data["correlation_id"] == "none"
        assert "context" not in log_data

    def test_different_log_levels(self, caplog):
        """Test all log levels."""
        logger = get_structured_logger("test.module")

        with caplog.at_level(logging.DEBUG):
            logger.debug("Debug message")
            logger.info("Info message")
            logger.warning("Warning message")
            logger.error("Error message")

        levels = [json.loads(r.message)["level"] for r in caplog.records]
        assert levels == ["DEBUG", "INFO", "WARNING", "ERROR"]
        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
        ]

    def test_disabled_level_is_skipped(self, caplog):
        """Test that records below the logger level are not emitted."""
        logger = get_structured_logger("test.module")

        with caplog.at_level(logging.WARNING):
            logger.debug("hidden")
            logger.info("hidden")

        assert caplog.records == []

    def test_unserializable_context_is_repr(self, caplog):
        """Test that context values JSON cannot encode are logged via repr."""
        logger = get_structured_logger("test.module")

        with caplog.at_level(logging.INFO):
            logger.info("Object context", payload=b"bytes")

        log_data = json.loads(caplog.records[0].message)
        assert log_data["context"]["payload"] == "b'bytes'"

    def test_wraps_stdlib_logger(self):
        """Test that the wrapper uses the named stdlib logger."""
        logger = StructuredLogger("live_events.test")

        assert logger.logger is logging.getLogger("live_events.test")


class TestLoggingConfig:
    """Test process logging setup."""

    @pytest.fixture(autouse=True)
    def restore_package_level(self):
        package_logger = logging.getLogger("live_events")
        previous = package_logger.level
        yield
        package_logger.setLevel(previous)

    def test_quiets_aws_sdk_loggers(self):
        """Test that boto3 and botocore are limited to warnings."""
        configure_structured_logging("DEBUG")

        for name in AWS_SDK_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    @pytest.mark.parametrize("level", ["debug", "DEBUG", logging.DEBUG])
    def test_sets_package_level(self, level):
        """Test that the live events loggers follow the requested level."""
        configure_structured_logging(level)

        assert logging.getLogger("live_events").level == logging.DEBUG
        assert logging.getLogger("live_events.streaming.worker").isEnabledFor(logging.DEBUG)
