"""Structured logging utilities for live events."""
import json
import logging
import uuid
from datetime import UTC, datetime
from typing import Optional


class StructuredLogger:
    """Structured logger with correlation ID support."""

    def __init__(self, logger_name: str, correlation_prefix: str = "CORR"):
        self.logger = logging.getLogger(logger_name)
        self._correlation_prefix = correlation_prefix
        self._correlation_id: Optional[str] = None

    def set_correlation_id(self, correlation_id: str):
        """Set correlation ID for current context."""
        self._correlation_id = correlation_id

    def clear_correlation_id(self):
        """Clear correlation ID."""
        self._correlation_id = None

    def generate_correlation_id(self) -> str:
        """Generate new correlation ID."""
        return f"{self._correlation_prefix}_{uuid.uuid4().hex[:12]}"

    def _format_message(self, level: str, message: str, **kwargs) -> dict:
        """Format log message with structured data."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            "correlation_id": self._correlation_id or "none",
        }

        if kwargs:
            log_entry["context"] = kwargs

        return log_entry

    def _emit(self, level: int, level_name: str, message: str, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        entry = self._format_message(level_name, message, **kwargs)
        # Context values are arbitrary caller data; fall back to repr for the odd ones
        self.logger.log(level, json.dumps(entry, default=repr))

    def info(self, message: str, **kwargs):
        """Log info with structured data."""
        self._emit(logging.INFO, "INFO", message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning with structured data."""
        self._emit(logging.WARNING, "WARNING", message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error with structured data."""
        self._emit(logging.ERROR, "ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug with structured data."""
        self._emit(logging.DEBUG, "DEBUG", message, **kwargs)


def get_structured_logger(name: str, correlation_prefix: str = "CORR") -> StructuredLogger:
    """Get or create structured logger."""
    return StructuredLogger(name, correlation_prefix=correlation_prefix)
