"""Authorization engine - evaluate (path, operation) requests against a SafetyPolicy.

This module provides the AuthorizationEngine class that decides, for any
requested path and operation, whether the request is permitted.

Evaluation order (short-circuit on first denial):
1. Operation gate: read-only narrowing, then allowed_operations
2. Canonicalize the path against home_path
3. Traversal check: null bytes, relative requests escaping home_path
4. Denylist: built-in baseline + configured forbidden prefixes
5. Allowlist: skipped when empty (allow all except forbidden)
6. Depth: canonical depth must not exceed max_depth
7. Allow, returning the resolved path for the filesystem collaborator

Design principles:
1. Denylist always takes precedence over allowlist
2. Matching is segment-prefix equality, never character-prefix
3. Decisions depend only on (raw path, operation, frozen policy)
4. The engine never performs I/O

Order matters only for which reason is reported; an allow requires every
rule to agree.
"""

from __future__ import annotations

__all__ = [
    "AuthorizationEngine",
    "authorize",
]

from fs_acp.pdp.canonical import CanonicalPath, canonicalize
from fs_acp.pdp.decision import AuthorizationResult, DenialReason
from fs_acp.pdp.matcher import PathPrefix, matches_allowed, matches_forbidden, resolve_prefix
from fs_acp.pdp.operation import READ_ONLY_OPERATIONS, Operation, parse_operation
from fs_acp.pdp.policy import SafetyPolicy


class AuthorizationEngine:
    """Stateless authorization engine.

    Holds only the frozen policy and the allow/deny prefixes resolved from it
    at construction. Safe to share across threads and tasks: every method
    is a pure function of its arguments and the policy.

    Attributes:
        policy: The effective safety policy.
    """

    def __init__(self, policy: SafetyPolicy) -> None:
        """Initialize the engine.

        Args:
            policy: Effective policy (see merge_policy()).
        """
        self._policy = policy
        root = canonicalize("", policy).segments
        self._forbidden: tuple[PathPrefix, ...] = tuple(
            resolve_prefix(entry, root) for entry in policy.forbidden_paths
        )
        self._allowed: tuple[PathPrefix, ...] = tuple(
            resolve_prefix(entry, root) for entry in policy.allowed_paths
        )

    @property
    def policy(self) -> SafetyPolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Full evaluation
    # ------------------------------------------------------------------

    def authorize(self, raw_path: str, operation: Operation | str) -> AuthorizationResult:
        """Authorize one request.

        Args:
            raw_path: Path supplied by the caller.
            operation: Requested operation kind.

        Returns:
            ALLOW result carrying the canonical path, or DENY result with reason.

        Raises:
            ValueError: If operation is not a known operation kind.
        """
        op = parse_operation(operation)
        op_result = self.check_operation(op)
        if not op_result.is_allowed:
            return AuthorizationResult.denied(
                DenialReason.OPERATION_NOT_PERMITTED,
                op_result.message,
                operation=op,
                raw_path=raw_path,
            )
        return self.check_path(raw_path).with_operation(op)

    # ------------------------------------------------------------------
    # Step 1: operation gate
    # ------------------------------------------------------------------

    def check_operation(self, operation: Operation | str) -> AuthorizationResult:
        """Evaluate the operation gate only.

        Args:
            operation: Requested operation kind.

        Returns:
            ALLOW or DENY(operation-not-permitted) result.
        """
        op = parse_operation(operation)

        if self._policy.read_only and op not in READ_ONLY_OPERATIONS:
            return AuthorizationResult.denied(
                DenialReason.OPERATION_NOT_PERMITTED,
                f"Operation not allowed: {op.value} (read-only mode)",
                operation=op,
            )

        if op not in self._policy.allowed_operations:
            return AuthorizationResult.denied(
                DenialReason.OPERATION_NOT_PERMITTED,
                f"Operation not allowed: {op.value}",
                operation=op,
            )

        return AuthorizationResult.allowed(operation=op)

    # ------------------------------------------------------------------
    # Steps 2-6: path gate
    # ------------------------------------------------------------------

    def check_path(self, raw_path: str) -> AuthorizationResult:
        """Evaluate the path gate only (canonicalize, traversal, deny, allow, depth).

        Args:
            raw_path: Path supplied by the caller.

        Returns:
            ALLOW result with the canonical path, or DENY result.
        """
        max_depth = self._policy.max_depth
        path = canonicalize(raw_path, self._policy)

        def deny(reason: DenialReason, message: str) -> AuthorizationResult:
            return AuthorizationResult.denied(
                reason, message, raw_path=raw_path, path=path, max_depth=max_depth
            )

        # Traversal / out-of-root
        if "\x00" in raw_path:
            return deny(DenialReason.PATH_NOT_PERMITTED, f"Path not allowed: {raw_path!r} contains a null byte")
        if path.out_of_root and not path.is_absolute_request:
            return deny(
                DenialReason.PATH_NOT_PERMITTED,
                f"Path not allowed: {raw_path} escapes home directory {self._policy.home_path}",
            )

        # Denylist (takes precedence over allowlist)
        forbidden = self._first_forbidden(path)
        if forbidden is not None:
            return deny(
                DenialReason.PATH_NOT_PERMITTED,
                f"Path not allowed: {raw_path} is under forbidden path {forbidden.raw}",
            )

        # Allowlist (empty = allow all except forbidden)
        if self._allowed and not any(matches_allowed(path, prefix) for prefix in self._allowed):
            return deny(
                DenialReason.PATH_NOT_PERMITTED,
                f"Path not allowed: {raw_path} is not under any allowed path",
            )

        # Depth (paths outside home carry no depth)
        if path.depth is not None and path.depth > max_depth:
            return deny(
                DenialReason.PATH_TOO_DEEP,
                f"Path exceeds maximum depth: {raw_path} (depth {path.depth} > limit {max_depth})",
            )

        return AuthorizationResult.allowed(raw_path=raw_path, path=path, max_depth=max_depth)

    def _first_forbidden(self, path: CanonicalPath) -> PathPrefix | None:
        for prefix in self._forbidden:
            if matches_forbidden(path, prefix):
                return prefix
        return None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def is_operation_allowed(self, operation: Operation | str) -> bool:
        """Check the operation gate as a boolean."""
        return self.check_operation(operation).is_allowed

    def is_path_allowed(self, raw_path: str) -> bool:
        """Check the path gate as a boolean, discarding the denial reason."""
        return self.check_path(raw_path).is_allowed


def authorize(raw_path: str, operation: Operation | str, policy: SafetyPolicy) -> AuthorizationResult:
    """Authorize one request against a policy.

    Convenience wrapper for one-off checks; build an AuthorizationEngine
    to reuse resolved prefixes across calls.
    """
    return AuthorizationEngine(policy).authorize(raw_path, operation)
