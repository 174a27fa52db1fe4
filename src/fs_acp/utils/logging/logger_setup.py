"""Logger setup utilities for creating JSONL loggers.

Creates loggers that write JSONL with ISO 8601 timestamps to a file.
Used for the decision audit log.
"""

from __future__ import annotations

__all__ = ["setup_jsonl_logger"]

import logging
from pathlib import Path

from fs_acp.utils.file_helpers import set_secure_permissions
from fs_acp.utils.logging.iso_formatter import ISO8601Formatter


def _ensure_secure_log_directory(log_file: Path) -> None:
    """Create log directory with secure permissions.

    Args:
        log_file: Path to the log file (parent directory will be created).

    Raises:
        PermissionError: If unable to create log directory due to permissions.
        OSError: If directory creation fails for other reasons.
    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        set_secure_permissions(log_file.parent, is_directory=True)
    except PermissionError as e:
        raise PermissionError(f"Cannot create log directory {log_file.parent}: {e}") from e
    except OSError as e:
        raise OSError(f"Failed to create log directory {log_file.parent}: {e}") from e


def setup_jsonl_logger(
    logger_name: str,
    log_file: Path,
    log_level: int = logging.INFO,
) -> logging.Logger:
    """Set up a logger that writes JSONL with ISO 8601 timestamps.

    Creates log directory if it doesn't exist with secure permissions (owner-only: 700).

    Args:
        logger_name: Name for the logger (e.g., "fs-acp.audit.decisions")
        log_file: Path to the log file
        log_level: Logging level (default: INFO)

    Returns:
        logging.Logger: Configured logger instance

    Raises:
        PermissionError: If unable to create log directory due to permissions
        OSError: If directory creation fails for other reasons
    """
    _ensure_secure_log_directory(log_file)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Don't propagate to root logger

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    return logger
