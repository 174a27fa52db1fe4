"""Safety policy models and configuration merge.

Policy structure:
    SafetyConfig (partial, caller-supplied - every field optional)
        │  merge_policy()
        ▼
    SafetyPolicy (effective, frozen)
    ├── home_path: Absolute directory relative requests resolve against
    ├── allowed_paths: Prefixes; empty = allow all except forbidden
    ├── forbidden_paths: Built-in baseline + caller entries (additive)
    ├── max_depth: Segments permitted below home_path
    ├── allowed_operations: Operation kinds permitted
    └── read_only: Narrows operations to the read-only subset

Design principles:
1. Denial is additive: callers can add forbidden prefixes, never remove
   the built-in baseline
2. Allowance is constraining: a non-empty allowlist limits access
3. The effective policy is built once and never mutated
"""

from __future__ import annotations

__all__ = [
    "SafetyConfig",
    "SafetyPolicy",
    "merge_policy",
]

import os
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from fs_acp.constants import DEFAULT_FORBIDDEN_PATHS, DEFAULT_MAX_DEPTH
from fs_acp.pdp.canonical import split_segments
from fs_acp.pdp.operation import ALL_OPERATIONS, READ_ONLY_OPERATIONS, Operation


def _dedupe(entries: Iterable[str]) -> tuple[str, ...]:
    """Remove duplicates, preserving first occurrence."""
    return tuple(dict.fromkeys(entries))


def _reject_blank_entries(entries: list[str] | tuple[str, ...] | None) -> Any:
    if entries is None:
        return entries
    for entry in entries:
        if not entry.strip():
            raise ValueError("Path entries cannot be empty or whitespace-only")
        if "\x00" in entry:
            raise ValueError("Path entries cannot contain null bytes")
    return entries


class SafetyConfig(BaseModel):
    """Caller-supplied partial safety configuration.

    Every field is optional; unset fields fall back to defaults in
    merge_policy(). Unknown keys are rejected so that typos in a config
    file fail loudly instead of silently weakening the policy.

    Attributes:
        home_path: Base directory for relative requests (default: working directory).
        allowed_paths: Allowed prefixes, relative to home_path unless absolute.
        forbidden_paths: Extra forbidden prefixes, merged with the built-in baseline.
        max_depth: Maximum segments below home_path (default 10).
        allowed_operations: Permitted operation kinds (default: all).
        read_only: Restrict to read-file, check-exists, list-directory.
    """

    home_path: str | None = None
    allowed_paths: list[str] | None = None
    forbidden_paths: list[str] | None = None
    max_depth: PositiveInt | None = None
    allowed_operations: list[Operation] | None = None
    read_only: bool | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("allowed_paths", "forbidden_paths", mode="after")
    @classmethod
    def reject_blank_paths(cls, v: list[str] | None) -> list[str] | None:
        """Blank entries would resolve to the home directory itself."""
        return _reject_blank_entries(v)


class SafetyPolicy(BaseModel):
    """Effective safety policy with every field populated.

    Immutable once constructed. The built-in forbidden baseline is always
    present: a validator re-adds it even when the policy is built directly
    instead of through merge_policy().
    """

    home_path: str
    allowed_paths: tuple[str, ...] = ()
    forbidden_paths: tuple[str, ...] = DEFAULT_FORBIDDEN_PATHS
    max_depth: PositiveInt = DEFAULT_MAX_DEPTH
    allowed_operations: tuple[Operation, ...] = ALL_OPERATIONS
    read_only: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("home_path", mode="after")
    @classmethod
    def normalize_home_path(cls, v: str) -> str:
        """Home must be absolute; store it in normalized form."""
        if not v.startswith("/"):
            raise ValueError(f"home_path must be absolute, got {v!r}")
        return "/" + "/".join(split_segments(v))

    @field_validator("allowed_paths", mode="after")
    @classmethod
    def validate_allowed_paths(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _dedupe(_reject_blank_entries(v))

    @field_validator("forbidden_paths", mode="after")
    @classmethod
    def ensure_forbidden_baseline(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Baseline entries always come first and cannot be removed."""
        return _dedupe((*DEFAULT_FORBIDDEN_PATHS, *_reject_blank_entries(v)))

    @field_validator("allowed_operations", mode="after")
    @classmethod
    def dedupe_operations(cls, v: tuple[Operation, ...]) -> tuple[Operation, ...]:
        return tuple(dict.fromkeys(v))

    @property
    def effective_operations(self) -> frozenset[Operation]:
        """Operations actually permitted after read-only narrowing."""
        allowed = frozenset(self.allowed_operations)
        if self.read_only:
            return allowed & READ_ONLY_OPERATIONS
        return allowed

    @property
    def allow_all_paths(self) -> bool:
        """True when no allowlist is configured (allow all except forbidden)."""
        return not self.allowed_paths

    def to_summary(self) -> dict[str, Any]:
        """JSON-compatible view of the effective policy."""
        return {
            "home_path": self.home_path,
            "allowed_paths": list(self.allowed_paths),
            "forbidden_paths": list(self.forbidden_paths),
            "max_depth": self.max_depth,
            "allowed_operations": [op.value for op in self.allowed_operations],
            "read_only": self.read_only,
        }


def merge_policy(
    config: SafetyConfig | Mapping[str, Any] | None = None,
    *,
    cwd: str | None = None,
) -> SafetyPolicy:
    """Merge a partial configuration over defaults.

    Pure function: the only environment input is the working directory,
    read once when cwd is not given.

    Merge rules:
    - home_path: missing/empty → cwd; relative → joined onto cwd
    - forbidden_paths: built-in baseline + caller entries (additive)
    - allowed_paths, max_depth, allowed_operations, read_only: replace defaults

    Args:
        config: Partial configuration (model or plain mapping) or None.
        cwd: Working directory used for home_path defaults.

    Returns:
        Frozen effective SafetyPolicy.

    Raises:
        pydantic.ValidationError: If the configuration is invalid.
    """
    if config is None:
        config = SafetyConfig()
    elif not isinstance(config, SafetyConfig):
        config = SafetyConfig.model_validate(dict(config))

    base_dir = cwd if cwd is not None else os.getcwd()
    home = config.home_path.strip() if config.home_path else ""
    if not home:
        home = base_dir
    elif not home.startswith("/"):
        home = f"{base_dir.rstrip('/')}/{home}"

    fields: dict[str, Any] = {
        "home_path": home,
        "forbidden_paths": (*DEFAULT_FORBIDDEN_PATHS, *(config.forbidden_paths or ())),
    }
    if config.allowed_paths is not None:
        fields["allowed_paths"] = tuple(config.allowed_paths)
    if config.max_depth is not None:
        fields["max_depth"] = config.max_depth
    if config.allowed_operations is not None:
        fields["allowed_operations"] = tuple(config.allowed_operations)
    if config.read_only is not None:
        fields["read_only"] = config.read_only

    return SafetyPolicy(**fields)
