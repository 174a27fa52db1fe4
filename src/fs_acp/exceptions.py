"""Custom exceptions for fs-acp.

This module contains all custom exceptions used throughout the package.
Exceptions are organized into two categories:

Denials (per-call, caller decides what to do next):
    - PermissionDeniedError: Base for every authorization denial
    - OperationNotPermittedError: Operation excluded by read-only mode or allowlist
    - PathNotPermittedError: Forbidden prefix, allowlist miss, or out-of-root escape
    - PathTooDeepError: Canonical depth exceeds max_depth

Setup failures:
    - ConfigurationError: Config file missing, unreadable, or invalid

Denials are raised strictly before any call reaches the underlying
filesystem, so a denial never leaves the filesystem in an intermediate state.

Usage:
    from fs_acp.exceptions import PermissionDeniedError, PathTooDeepError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "OperationNotPermittedError",
    "PathNotPermittedError",
    "PathTooDeepError",
    "PermissionDeniedError",
]

from typing import Any


# =============================================================================
# Denials (per-call; the caller may retry with another path/operation)
# =============================================================================


class PermissionDeniedError(Exception):
    """Raised when a request is denied by the safety policy.

    Attributes:
        reason: Denial reason kind (matches DenialReason values).
        message: Human-readable denial reason.
        operation: Operation that was requested (if known).
        path: Offending path as supplied by the caller (if applicable).
    """

    reason: str = "denied"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        path: str | None = None,
    ) -> None:
        """Initialize PermissionDeniedError.

        Args:
            message: Human-readable denial reason.
            operation: Operation that was requested.
            path: Path that was denied.
        """
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.path = path

    def to_dict(self) -> dict[str, Any]:
        """Structured representation for logs and CLI output."""
        data: dict[str, Any] = {"reason": self.reason, "message": self.message}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.path is not None:
            data["path"] = self.path
        return data

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        parts = [f"{type(self).__name__}({self.message!r}"]
        if self.operation is not None:
            parts.append(f", operation={self.operation!r}")
        if self.path is not None:
            parts.append(f", path={self.path!r}")
        parts.append(")")
        return "".join(parts)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        return self.message


class OperationNotPermittedError(PermissionDeniedError):
    """Operation excluded by read-only mode or by allowed_operations."""

    reason = "operation-not-permitted"

    def __init__(self, operation: str, *, message: str | None = None) -> None:
        super().__init__(message or f"Operation not allowed: {operation}", operation=operation)


class PathNotPermittedError(PermissionDeniedError):
    """Path matched a forbidden prefix, missed the allowlist, or escaped the root."""

    reason = "path-not-permitted"

    def __init__(
        self,
        path: str,
        *,
        operation: str | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message or f"Path not allowed: {path}", operation=operation, path=path)


class PathTooDeepError(PermissionDeniedError):
    """Canonical depth exceeds the configured max_depth.

    Attributes:
        depth: Computed depth below the home directory.
        max_depth: Configured limit.
    """

    reason = "path-too-deep"

    def __init__(
        self,
        path: str,
        depth: int,
        max_depth: int,
        *,
        operation: str | None = None,
    ) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Path exceeds maximum depth: {path} (depth {depth} > limit {max_depth})",
            operation=operation,
            path=path,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["depth"] = self.depth
        data["max_depth"] = self.max_depth
        return data


# =============================================================================
# Setup failures
# =============================================================================


class ConfigurationError(Exception):
    """Configuration is invalid or incomplete.

    Raised when:
    - Config file does not exist (not initialized)
    - Config file contains invalid JSON
    - Config file fails Pydantic validation
    """
