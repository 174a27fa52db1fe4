"""Guarded filesystem - Policy Enforcement Point for filesystem calls.

Wraps any AsyncFileSystem with a SafetyPolicy. Every call goes through:

1. Operation gate (read-only mode, allowed_operations)
2. Path authorization (canonicalize, traversal, denylist, allowlist, depth)
3. Delegation to the collaborator with the resolved absolute path

Denials raise a typed PermissionDeniedError before any I/O is issued.
Errors raised by the collaborator after a successful authorization are
passed through unmodified.

The wrapper is stateless across calls: the policy is frozen at
construction and no per-call state is kept, so one instance can serve
concurrent tasks.
"""

from __future__ import annotations

__all__ = [
    "GuardedFileSystem",
    "create_guarded_filesystem",
]

import time
from collections.abc import Mapping
from typing import Any

from fs_acp.backends.protocol import AsyncFileSystem
from fs_acp.pdp.decision import AuthorizationResult
from fs_acp.pdp.engine import AuthorizationEngine
from fs_acp.pdp.operation import Operation
from fs_acp.pdp.policy import SafetyConfig, SafetyPolicy, merge_policy
from fs_acp.telemetry.decision_logger import DecisionEventLogger
from fs_acp.telemetry.system_logger import get_system_logger


class GuardedFileSystem:
    """AI-safe wrapper around an AsyncFileSystem.

    Usage:
        fs = GuardedFileSystem(MemoryFileSystem(), {"allowed_paths": ["./workspace/"]})
        await fs.write_file("./workspace/out.txt", "ok")
        await fs.read_file("/etc/passwd")  # raises PathNotPermittedError

    Attributes:
        base: The wrapped filesystem collaborator.
    """

    def __init__(
        self,
        base: AsyncFileSystem,
        config: SafetyConfig | SafetyPolicy | Mapping[str, Any] | None = None,
        *,
        decision_logger: DecisionEventLogger | None = None,
    ) -> None:
        """Initialize the guard.

        Args:
            base: Filesystem collaborator to delegate to.
            config: Partial config (merged over defaults) or an effective SafetyPolicy.
            decision_logger: Optional audit logger for every decision.
        """
        self.base = base
        policy = config if isinstance(config, SafetyPolicy) else merge_policy(config)
        self._engine = AuthorizationEngine(policy)
        self._decision_logger = decision_logger

    # ------------------------------------------------------------------
    # Enforcement
    # ------------------------------------------------------------------

    def _authorize(self, path: str, operation: Operation) -> str:
        """Authorize a request, raising on denial.

        Returns:
            Resolved absolute path for the collaborator.

        Raises:
            PermissionDeniedError: If the policy denies the request.
        """
        start = time.perf_counter()
        result = self._engine.authorize(path, operation)
        eval_ms = (time.perf_counter() - start) * 1000

        if self._decision_logger is not None:
            self._decision_logger.log(result, policy_eval_ms=eval_ms)

        result.raise_for_denial()
        # An ALLOW from authorize() always carries the canonical path
        assert result.resolved_path is not None
        return result.resolved_path

    def _log_backend_failure(self, operation: Operation, path: str, error: Exception) -> None:
        get_system_logger().warning(
            {
                "event": "backend_operation_failed",
                "message": f"{operation.value} failed for {path}: {type(error).__name__}: {error}",
                "operation": operation.value,
                "path": path,
                "error_type": type(error).__name__,
            }
        )

    # ------------------------------------------------------------------
    # Filesystem operations
    # ------------------------------------------------------------------

    async def read_file(self, path: str) -> str:
        resolved = self._authorize(path, Operation.READ_FILE)
        try:
            return await self.base.read_file(resolved)
        except Exception as e:
            self._log_backend_failure(Operation.READ_FILE, resolved, e)
            raise

    async def write_file(self, path: str, content: str) -> None:
        resolved = self._authorize(path, Operation.WRITE_FILE)
        try:
            await self.base.write_file(resolved, content)
        except Exception as e:
            self._log_backend_failure(Operation.WRITE_FILE, resolved, e)
            raise

    async def exists(self, path: str) -> bool:
        resolved = self._authorize(path, Operation.CHECK_EXISTS)
        try:
            return await self.base.exists(resolved)
        except Exception as e:
            self._log_backend_failure(Operation.CHECK_EXISTS, resolved, e)
            raise

    async def delete_file(self, path: str) -> None:
        resolved = self._authorize(path, Operation.DELETE_FILE)
        try:
            await self.base.delete_file(resolved)
        except Exception as e:
            self._log_backend_failure(Operation.DELETE_FILE, resolved, e)
            raise

    async def delete_dir(self, path: str) -> None:
        resolved = self._authorize(path, Operation.DELETE_DIRECTORY)
        try:
            await self.base.delete_dir(resolved)
        except Exception as e:
            self._log_backend_failure(Operation.DELETE_DIRECTORY, resolved, e)
            raise

    async def ensure_dir(self, path: str) -> None:
        resolved = self._authorize(path, Operation.ENSURE_DIRECTORY)
        try:
            await self.base.ensure_dir(resolved)
        except Exception as e:
            self._log_backend_failure(Operation.ENSURE_DIRECTORY, resolved, e)
            raise

    async def create_dir(self, path: str) -> None:
        """Alias of ensure_dir (same operation kind)."""
        await self.ensure_dir(path)

    async def read_dir(self, path: str) -> list[str]:
        resolved = self._authorize(path, Operation.LIST_DIRECTORY)
        try:
            return await self.base.read_dir(resolved)
        except Exception as e:
            self._log_backend_failure(Operation.LIST_DIRECTORY, resolved, e)
            raise

    async def chmod(self, path: str, mode: int) -> None:
        resolved = self._authorize(path, Operation.CHANGE_MODE)
        try:
            await self.base.chmod(resolved, mode)
        except Exception as e:
            self._log_backend_failure(Operation.CHANGE_MODE, resolved, e)
            raise

    # ------------------------------------------------------------------
    # Configuration access
    # ------------------------------------------------------------------

    def get_safety_config(self) -> SafetyPolicy:
        """Get the effective safety policy, including merged defaults."""
        return self._engine.policy

    def is_operation_allowed(self, operation: Operation | str) -> bool:
        """Check if an operation is allowed (without raising)."""
        return self._engine.is_operation_allowed(operation)

    def is_path_allowed(self, path: str) -> bool:
        """Check if a path is allowed (without raising)."""
        return self._engine.is_path_allowed(path)

    def authorize(self, path: str, operation: Operation | str) -> AuthorizationResult:
        """Full decision for a request, without raising or logging."""
        return self._engine.authorize(path, operation)


def create_guarded_filesystem(
    base: AsyncFileSystem,
    config: SafetyConfig | SafetyPolicy | Mapping[str, Any] | None = None,
    *,
    decision_logger: DecisionEventLogger | None = None,
) -> GuardedFileSystem:
    """Factory function to create an AI-safe filesystem."""
    return GuardedFileSystem(base, config, decision_logger=decision_logger)
