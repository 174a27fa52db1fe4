"""Logging utilities and helpers.

This package provides logging infrastructure for fs-acp:
- iso_formatter.py: ISO8601Formatter for JSONL output
- logger_setup.py: setup_jsonl_logger for file-backed JSONL loggers
"""

from fs_acp.utils.logging.iso_formatter import ISO8601Formatter
from fs_acp.utils.logging.logger_setup import setup_jsonl_logger

__all__ = [
    "ISO8601Formatter",
    "setup_jsonl_logger",
]
