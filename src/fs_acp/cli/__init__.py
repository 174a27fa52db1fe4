"""Command-line interface for fs-acp.

Provides commands for checking requests against a safety policy and
managing the policy configuration file.
"""

from .main import cli, main

__all__ = ["cli", "main"]
