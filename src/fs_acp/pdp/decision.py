"""Decision types for authorization outcomes.

The engine reports every outcome as an AuthorizationResult: a tagged
value that is either an allow carrying the resolved path, or a deny
carrying a DenialReason and diagnostic details. The PEP turns denials
into typed exceptions via raise_for_denial().
"""

from __future__ import annotations

__all__ = [
    "AuthorizationResult",
    "Decision",
    "DenialReason",
]

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from fs_acp.pdp.operation import Operation

if TYPE_CHECKING:
    from fs_acp.pdp.canonical import CanonicalPath


class Decision(str, Enum):
    """Authorization decision outcome.

    Attributes:
        ALLOW: Request is permitted, forward to the filesystem.
        DENY: Request is blocked before any I/O.
    """

    ALLOW = "allow"
    DENY = "deny"


class DenialReason(str, Enum):
    """Why a request was denied."""

    OPERATION_NOT_PERMITTED = "operation-not-permitted"
    PATH_NOT_PERMITTED = "path-not-permitted"
    PATH_TOO_DEEP = "path-too-deep"


@dataclass(frozen=True, slots=True)
class AuthorizationResult:
    """Outcome of authorizing one (path, operation) request.

    Attributes:
        decision: ALLOW or DENY.
        operation: Requested operation (None for path-only checks).
        raw_path: Path as supplied by the caller (None for operation-only checks).
        path: Canonical path, when canonicalization ran.
        reason: Denial reason (None when allowed).
        message: Human-readable explanation.
        depth: Canonical depth below the home directory (None if out of root).
        max_depth: Configured depth limit (set for path checks).
    """

    decision: Decision
    operation: Operation | None = None
    raw_path: str | None = None
    path: "CanonicalPath | None" = None
    reason: DenialReason | None = None
    message: str = ""
    depth: int | None = None
    max_depth: int | None = None

    @classmethod
    def allowed(
        cls,
        *,
        operation: Operation | None = None,
        raw_path: str | None = None,
        path: "CanonicalPath | None" = None,
        max_depth: int | None = None,
    ) -> AuthorizationResult:
        """Build an ALLOW result."""
        return cls(
            decision=Decision.ALLOW,
            operation=operation,
            raw_path=raw_path,
            path=path,
            message="allowed",
            depth=path.depth if path is not None else None,
            max_depth=max_depth,
        )

    @classmethod
    def denied(
        cls,
        reason: DenialReason,
        message: str,
        *,
        operation: Operation | None = None,
        raw_path: str | None = None,
        path: "CanonicalPath | None" = None,
        max_depth: int | None = None,
    ) -> AuthorizationResult:
        """Build a DENY result."""
        return cls(
            decision=Decision.DENY,
            operation=operation,
            raw_path=raw_path,
            path=path,
            reason=reason,
            message=message,
            depth=path.depth if path is not None else None,
            max_depth=max_depth,
        )

    @property
    def is_allowed(self) -> bool:
        return self.decision == Decision.ALLOW

    @property
    def resolved_path(self) -> str | None:
        """Absolute path the filesystem collaborator should use."""
        return self.path.path if self.path is not None else None

    def with_operation(self, operation: Operation) -> AuthorizationResult:
        """Copy of this result tagged with the requested operation."""
        return replace(self, operation=operation)

    def raise_for_denial(self) -> None:
        """Raise the typed PermissionDeniedError for a DENY result.

        Does nothing for ALLOW results.

        Raises:
            OperationNotPermittedError: Operation gate failed.
            PathNotPermittedError: Path gate failed.
            PathTooDeepError: Depth limit exceeded.
        """
        if self.is_allowed:
            return

        # Local import to avoid circular dependency (exceptions is imported package-wide)
        from fs_acp.exceptions import (
            OperationNotPermittedError,
            PathNotPermittedError,
            PathTooDeepError,
        )

        op_value = self.operation.value if self.operation is not None else None
        raw = self.raw_path if self.raw_path is not None else ""

        if self.reason == DenialReason.OPERATION_NOT_PERMITTED:
            raise OperationNotPermittedError(op_value or "unknown", message=self.message or None)
        if self.reason == DenialReason.PATH_TOO_DEEP:
            raise PathTooDeepError(
                raw,
                self.depth if self.depth is not None else 0,
                self.max_depth if self.max_depth is not None else 0,
                operation=op_value,
            )
        raise PathNotPermittedError(raw, operation=op_value, message=self.message or None)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible summary for logging and CLI output."""
        data: dict[str, Any] = {"decision": self.decision.value}
        if self.operation is not None:
            data["operation"] = self.operation.value
        if self.raw_path is not None:
            data["path"] = self.raw_path
        if self.path is not None:
            data["resolved_path"] = self.path.path
        if self.reason is not None:
            data["reason"] = self.reason.value
        data["message"] = self.message
        if self.depth is not None:
            data["depth"] = self.depth
        if self.max_depth is not None:
            data["max_depth"] = self.max_depth
        return data
