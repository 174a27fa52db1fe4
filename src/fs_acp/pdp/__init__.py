"""Policy Decision Point (PDP) - path and operation authorization.

This package decides whether a filesystem request is permitted:

- pdp/ (this package): Canonicalizes paths and evaluates the safety policy
- pep/: Enforces decisions in front of the filesystem collaborator

The PDP is stateless and side-effect free. All I/O and enforcement
happens in the PEP.

Structure:
    operation.py      - Operation enum and the read-only subset
    decision.py       - Decision/DenialReason enums, AuthorizationResult
    policy.py         - SafetyConfig, SafetyPolicy, merge_policy
    canonical.py      - Path canonicalization against home_path
    matcher.py        - Segment-prefix matching for allow/deny entries
    engine.py         - AuthorizationEngine
"""

from fs_acp.pdp.canonical import CanonicalPath, canonicalize, split_segments
from fs_acp.pdp.decision import AuthorizationResult, Decision, DenialReason
from fs_acp.pdp.engine import AuthorizationEngine, authorize
from fs_acp.pdp.operation import ALL_OPERATIONS, READ_ONLY_OPERATIONS, Operation, parse_operation
from fs_acp.pdp.policy import SafetyConfig, SafetyPolicy, merge_policy

__all__ = [
    # Operations
    "ALL_OPERATIONS",
    "Operation",
    "READ_ONLY_OPERATIONS",
    "parse_operation",
    # Decisions
    "AuthorizationResult",
    "Decision",
    "DenialReason",
    # Policy models
    "SafetyConfig",
    "SafetyPolicy",
    "merge_policy",
    # Canonicalization
    "CanonicalPath",
    "canonicalize",
    "split_segments",
    # Engine
    "AuthorizationEngine",
    "authorize",
]
