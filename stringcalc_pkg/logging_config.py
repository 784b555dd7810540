"""Structured logging configuration for StringCalc.

Records may carry calculator context through ``extra=``; the formatter
appends the fields named in ``CONTEXT_FIELDS`` when present::

    logger.error("Evaluation failed", extra={"expression": "1/0", "error_code": "ARITHMETIC_FAULT"})
"""

import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER = "stringcalc"

CONTEXT_FIELDS = ("error_code", "expression")


class StructuredFormatter(logging.Formatter):
    """Timestamp, level, logger name and message, then any calculator context fields."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        context = [
            f"{field}={getattr(record, field)!r}"
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        ]
        if context:
            message = f"{message} ({', '.join(context)})"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str = "INFO", log_file: Optional[str] = None
) -> logging.Logger:
    """Configure the ``stringcalc`` logger tree.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file receiving the same records as stderr

    Returns:
        The configured root ``stringcalc`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Reconfiguring replaces handlers instead of stacking them
    logger.handlers.clear()

    formatter = StructuredFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``stringcalc.<name>`` child logger for a module."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
