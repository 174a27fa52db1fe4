"""System logger for operational events.

This module provides a singleton system logger for operational events that
aren't part of the decision audit trail (e.g., filesystem collaborator
failures, a decision log that cannot be opened).

Messages are dicts with an 'event' key and a human-readable 'message';
ConsoleFormatter prints the message to stderr.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "get_system_logger",
    "set_system_log_level",
]

import logging
import sys

from fs_acp.constants import APP_NAME


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human-readable console output.

        Args:
            record: The log record to format.

        Returns:
            str: Formatted log message with level prefix.
        """
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Module-level singleton logger
_system_logger: logging.Logger | None = None


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with a stderr handler at INFO.

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> from fs_acp.telemetry.system_logger import get_system_logger
        >>> logger = get_system_logger()
        >>> logger.warning({"event": "backend_operation_failed", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False  # Don't propagate to root logger

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def set_system_log_level(level: str) -> None:
    """Set the system logger level ("DEBUG" or "INFO")."""
    get_system_logger().setLevel(getattr(logging, level.upper(), logging.INFO))
