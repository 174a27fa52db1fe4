"""Tests for AuthorizationEngine.

Covers the evaluation order (operation gate, traversal, denylist,
allowlist, depth) and the properties every decision must satisfy.
"""

from __future__ import annotations

import pytest

from fs_acp.pdp import (
    AuthorizationEngine,
    Decision,
    DenialReason,
    Operation,
    authorize,
    merge_policy,
)


class TestOperationGate:
    """Tests for check_operation() and read-only narrowing."""

    def test_all_operations_allowed_by_default(self, make_engine) -> None:
        engine = make_engine()

        assert all(engine.is_operation_allowed(op) for op in Operation)

    def test_operation_outside_allowlist_denied(self, make_engine) -> None:
        engine = make_engine(allowed_operations=["read-file"])

        result = engine.authorize("./a.txt", Operation.WRITE_FILE)

        assert result.decision == Decision.DENY
        assert result.reason == DenialReason.OPERATION_NOT_PERMITTED
        assert result.message == "Operation not allowed: write-file"

    @pytest.mark.parametrize(
        "operation",
        [
            Operation.WRITE_FILE,
            Operation.DELETE_FILE,
            Operation.DELETE_DIRECTORY,
            Operation.ENSURE_DIRECTORY,
            Operation.CHANGE_MODE,
        ],
    )
    def test_read_only_denies_mutations(self, make_engine, operation: Operation) -> None:
        engine = make_engine(read_only=True)

        result = engine.authorize("./a.txt", operation)

        assert result.reason == DenialReason.OPERATION_NOT_PERMITTED
        assert "read-only" in result.message

    @pytest.mark.parametrize(
        "operation",
        [Operation.READ_FILE, Operation.CHECK_EXISTS, Operation.LIST_DIRECTORY],
    )
    def test_read_only_permits_reads(self, make_engine, operation: Operation) -> None:
        assert make_engine(read_only=True).authorize("./a.txt", operation).is_allowed

    def test_operation_gate_runs_before_path_checks(self, make_engine) -> None:
        """A forbidden path with a forbidden operation reports the operation."""
        engine = make_engine(read_only=True)

        result = engine.authorize("/etc/passwd", Operation.WRITE_FILE)

        assert result.reason == DenialReason.OPERATION_NOT_PERMITTED
        assert result.raw_path == "/etc/passwd"

    def test_string_operation_accepted(self, make_engine) -> None:
        assert make_engine().authorize("./a.txt", "read-file").is_allowed

    def test_unknown_operation_raises(self, make_engine) -> None:
        with pytest.raises(ValueError, match="Valid operations"):
            make_engine().authorize("./a.txt", "format-disk")


class TestTraversal:
    """Relative requests may never escape home_path."""

    @pytest.mark.parametrize(
        "raw_path",
        [
            "../outside.txt",
            "../../../../etc/passwd",
            "../../../etc/passwd",
            "./a/../../outside",
            "a/b/../../../x",
        ],
    )
    def test_escape_denied(self, make_engine, raw_path: str) -> None:
        result = make_engine().authorize(raw_path, Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED
        assert "escapes home directory" in result.message

    def test_escape_through_allowed_prefix_denied(self, make_engine) -> None:
        """Starting inside an allowed prefix does not license climbing out of home."""
        engine = make_engine(allowed_paths=["./workspace/"])

        result = engine.authorize("./workspace/../../secret", Operation.READ_FILE)

        assert not engine.is_path_allowed("./workspace/../../secret")
        assert result.reason == DenialReason.PATH_NOT_PERMITTED
        assert "escapes home directory" in result.message

    def test_escape_denied_even_without_allowlist_or_denylist_match(self, make_engine) -> None:
        result = make_engine(home_path="/srv/app").authorize("../other/file", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED

    def test_dotdot_that_stays_inside_is_allowed(self, make_engine) -> None:
        result = make_engine().authorize("./a/../b.txt", Operation.READ_FILE)

        assert result.is_allowed
        assert result.resolved_path == "/home/agent/b.txt"

    def test_null_byte_denied(self, make_engine) -> None:
        result = make_engine().authorize("./a\x00.txt", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED
        assert "null byte" in result.message


class TestDenylist:
    """Forbidden prefixes, built-in and configured."""

    @pytest.mark.parametrize(
        "raw_path",
        ["/etc/passwd", "/etc", "/var/log/syslog", "/usr/bin/env", "/proc/1/mem", "/sys/kernel", "/bin/sh", "/sbin/init"],
    )
    def test_baseline_denied(self, make_engine, raw_path: str) -> None:
        result = make_engine().authorize(raw_path, Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED

    def test_baseline_applies_with_root_home(self, make_engine) -> None:
        """Relative requests that resolve into /etc are still denied."""
        result = make_engine(home_path="/").authorize("etc/passwd", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED

    def test_segment_prefix_not_character_prefix(self, make_engine) -> None:
        assert make_engine().authorize("/etcetera/x", Operation.READ_FILE).is_allowed

    def test_traversal_into_forbidden_denied(self, make_engine) -> None:
        result = make_engine().authorize("/tmp/../etc/passwd", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED

    def test_configured_entry_denied(self, make_engine) -> None:
        engine = make_engine(forbidden_paths=["./secret/"])

        result = engine.authorize("./secret/key.txt", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED
        assert "forbidden path ./secret/" in result.message

    def test_denylist_beats_allowlist(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./workspace/"], forbidden_paths=["./workspace/secret/"])

        assert engine.authorize("./workspace/ok.txt", Operation.READ_FILE).is_allowed
        result = engine.authorize("./workspace/secret/key.txt", Operation.READ_FILE)
        assert result.reason == DenialReason.PATH_NOT_PERMITTED

    def test_cannot_allow_baseline_path(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["/etc/"])

        assert not engine.is_path_allowed("/etc/hosts")


class TestAllowlist:
    """Allowed prefixes constrain access when non-empty."""

    def test_empty_allowlist_allows_everything_not_forbidden(self, make_engine) -> None:
        engine = make_engine()

        assert engine.is_path_allowed("./anything/here.txt")
        assert engine.is_path_allowed("/tmp/file.txt")

    def test_path_outside_allowlist_denied(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./workspace/"])

        result = engine.authorize("./other/file.txt", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED
        assert "not under any allowed path" in result.message

    def test_allowlist_entry_itself_allowed(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./workspace/"])

        assert engine.is_path_allowed("./workspace")

    def test_relative_allowlist_denies_absolute_paths(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./workspace/"])

        assert not engine.is_path_allowed("/tmp/file.txt")
        assert not engine.is_path_allowed("/home/agent/workspace/file.txt")

    def test_absolute_allowlist_entry(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["/tmp/"])

        assert engine.is_path_allowed("/tmp/file.txt")
        assert not engine.is_path_allowed("/opt/file.txt")

    def test_allowlist_character_prefix_not_matched(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./work/"])

        assert not engine.is_path_allowed("./workspace/file.txt")


class TestDepth:
    """Depth below home_path is bounded by max_depth."""

    def test_depth_at_limit_allowed(self, make_engine) -> None:
        engine = make_engine(max_depth=3)

        result = engine.authorize("./a/b/c", Operation.READ_FILE)

        assert result.is_allowed
        assert result.depth == 3

    def test_depth_over_limit_denied(self, make_engine) -> None:
        engine = make_engine(max_depth=3)

        result = engine.authorize("./a/b/c/d", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_TOO_DEEP
        assert result.depth == 4
        assert result.max_depth == 3
        assert result.message.startswith("Path exceeds maximum depth")

    def test_depth_uses_canonical_form(self, make_engine) -> None:
        """Redundant segments do not count toward depth."""
        engine = make_engine(max_depth=2)

        assert engine.is_path_allowed("./a/./b/../b/c/..")

    def test_default_depth_limit(self, make_engine) -> None:
        engine = make_engine()

        assert engine.is_path_allowed("./" + "/".join("d" * 10))
        assert not engine.is_path_allowed("./" + "/".join("d" * 11))

    def test_absolute_path_outside_home_has_no_depth_check(self, make_engine) -> None:
        engine = make_engine(max_depth=1)

        result = engine.authorize("/tmp/a/b/c/d", Operation.READ_FILE)

        assert result.is_allowed
        assert result.depth is None

    def test_absolute_path_inside_home_is_depth_checked(self, make_engine) -> None:
        engine = make_engine(max_depth=1)

        assert engine.authorize("/home/agent/a/b", Operation.READ_FILE).reason == DenialReason.PATH_TOO_DEEP

    def test_allowlist_checked_before_depth(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./workspace/"], max_depth=1)

        result = engine.authorize("./other/a/b", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED


class TestDecisionProperties:
    """Properties every decision satisfies."""

    def test_decision_is_deterministic(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./w/"], forbidden_paths=["./w/s/"], max_depth=3)

        for raw in ["./w/a", "./w/s/k", "../x", "./w/a/b/c/d"]:
            assert engine.authorize(raw, "read-file") == engine.authorize(raw, "read-file")

    def test_equivalent_paths_get_equal_decisions(self, make_engine) -> None:
        engine = make_engine(allowed_paths=["./w/"])

        a = engine.authorize("./w/x/../f", Operation.READ_FILE)
        b = engine.authorize("w/f", Operation.READ_FILE)

        assert a.decision == b.decision
        assert a.resolved_path == b.resolved_path

    def test_allow_carries_resolved_path(self, make_engine) -> None:
        result = make_engine().authorize("./w/f.txt", Operation.WRITE_FILE)

        assert result.is_allowed
        assert result.operation == Operation.WRITE_FILE
        assert result.resolved_path == "/home/agent/w/f.txt"
        assert result.reason is None

    def test_policy_not_mutated_by_evaluation(self, make_policy) -> None:
        policy = make_policy(forbidden_paths=["./s/"])
        before = policy.model_dump()

        AuthorizationEngine(policy).authorize("./s/x", Operation.READ_FILE)

        assert policy.model_dump() == before

    def test_module_level_authorize(self) -> None:
        policy = merge_policy({"home_path": "/h", "read_only": True})

        assert authorize("./f", Operation.READ_FILE, policy).is_allowed
        assert not authorize("./f", Operation.WRITE_FILE, policy).is_allowed

    def test_to_dict(self, make_engine) -> None:
        result = make_engine(max_depth=1).authorize("./a/b", Operation.READ_FILE)

        assert result.to_dict() == {
            "decision": "deny",
            "operation": "read-file",
            "path": "./a/b",
            "resolved_path": "/home/agent/a/b",
            "reason": "path-too-deep",
            "message": "Path exceeds maximum depth: ./a/b (depth 2 > limit 1)",
            "depth": 2,
            "max_depth": 1,
        }


class TestScenario:
    """Workspace policy with a secret subdirectory and a shallow depth limit."""

    @pytest.fixture
    def engine(self, make_engine) -> AuthorizationEngine:
        return make_engine(
            allowed_paths=["./workspace/"],
            forbidden_paths=["./workspace/secret/"],
            max_depth=2,
            allowed_operations=["read-file", "write-file"],
        )

    def test_write_inside_workspace_allowed(self, engine: AuthorizationEngine) -> None:
        assert engine.authorize("./workspace/file.txt", Operation.WRITE_FILE).is_allowed

    def test_secret_denied(self, engine: AuthorizationEngine) -> None:
        result = engine.authorize("./workspace/secret/key.txt", Operation.READ_FILE)

        assert result.reason == DenialReason.PATH_NOT_PERMITTED

    def test_delete_denied(self, engine: AuthorizationEngine) -> None:
        result = engine.authorize("./workspace/file.txt", Operation.DELETE_FILE)

        assert result.reason == DenialReason.OPERATION_NOT_PERMITTED

    def test_too_deep_denied(self, engine: AuthorizationEngine) -> None:
        result = engine.authorize("./workspace/a/b/file.txt", Operation.WRITE_FILE)

        assert result.reason == DenialReason.PATH_TOO_DEEP
