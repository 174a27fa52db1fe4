"""Shared utilities for fs-acp (file helpers, logging setup)."""
