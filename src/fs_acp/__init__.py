"""fs-acp: access-control proxy for filesystem operations.

Wraps any async filesystem collaborator with a path and operation policy
so that an AI agent or automated script can only reach a restricted
subset of paths and operations.

Usage:
    from fs_acp import GuardedFileSystem, MemoryFileSystem

    fs = GuardedFileSystem(
        MemoryFileSystem(),
        {"allowed_paths": ["./workspace/"], "read_only": True},
    )
    await fs.read_file("./workspace/notes.txt")
"""

from __future__ import annotations

__version__ = "0.1.0"

from fs_acp.backends import AsyncFileSystem, LocalFileSystem, MemoryFileSystem
from fs_acp.exceptions import (
    ConfigurationError,
    OperationNotPermittedError,
    PathNotPermittedError,
    PathTooDeepError,
    PermissionDeniedError,
)
from fs_acp.pdp import (
    AuthorizationEngine,
    AuthorizationResult,
    CanonicalPath,
    Decision,
    DenialReason,
    Operation,
    SafetyConfig,
    SafetyPolicy,
    canonicalize,
    merge_policy,
)
from fs_acp.pep import GuardedFileSystem, create_guarded_filesystem

__all__ = [
    "__version__",
    # Collaborators
    "AsyncFileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    # Errors
    "ConfigurationError",
    "OperationNotPermittedError",
    "PathNotPermittedError",
    "PathTooDeepError",
    "PermissionDeniedError",
    # Decision point
    "AuthorizationEngine",
    "AuthorizationResult",
    "CanonicalPath",
    "Decision",
    "DenialReason",
    "Operation",
    "SafetyConfig",
    "SafetyPolicy",
    "canonicalize",
    "merge_policy",
    # Enforcement point
    "GuardedFileSystem",
    "create_guarded_filesystem",
]
