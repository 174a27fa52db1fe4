"""Tests for SafetyConfig, SafetyPolicy and merge_policy."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fs_acp.constants import DEFAULT_FORBIDDEN_PATHS, DEFAULT_MAX_DEPTH
from fs_acp.pdp import ALL_OPERATIONS, Operation, SafetyConfig, SafetyPolicy, merge_policy


class TestMergeDefaults:
    """Defaults applied when fields are missing."""

    def test_no_config_uses_cwd_and_defaults(self) -> None:
        policy = merge_policy(None, cwd="/work/dir")

        assert policy.home_path == "/work/dir"
        assert policy.allowed_paths == ()
        assert policy.forbidden_paths == DEFAULT_FORBIDDEN_PATHS
        assert policy.max_depth == DEFAULT_MAX_DEPTH
        assert policy.allowed_operations == ALL_OPERATIONS
        assert policy.read_only is False
        assert policy.allow_all_paths

    def test_empty_home_falls_back_to_cwd(self) -> None:
        assert merge_policy({"home_path": "  "}, cwd="/w").home_path == "/w"

    def test_relative_home_joined_onto_cwd(self) -> None:
        assert merge_policy({"home_path": "sub/dir"}, cwd="/w").home_path == "/w/sub/dir"

    def test_home_path_is_normalized(self) -> None:
        assert merge_policy({"home_path": "/srv//data/./x/../"}).home_path == "/srv/data"

    def test_accepts_safety_config_model(self) -> None:
        config = SafetyConfig(home_path="/h", max_depth=3, read_only=True)

        policy = merge_policy(config)

        assert policy.max_depth == 3
        assert policy.read_only

    def test_merge_is_pure(self) -> None:
        config = {"home_path": "/h", "forbidden_paths": ["./secret/"]}

        assert merge_policy(config) == merge_policy(config)
        assert config == {"home_path": "/h", "forbidden_paths": ["./secret/"]}


class TestForbiddenBaseline:
    """The built-in forbidden list can be extended but never shrunk."""

    def test_caller_entries_are_added(self) -> None:
        policy = merge_policy({"home_path": "/h", "forbidden_paths": ["./secret/"]})

        assert policy.forbidden_paths == (*DEFAULT_FORBIDDEN_PATHS, "./secret/")

    def test_empty_list_does_not_remove_baseline(self) -> None:
        policy = merge_policy({"home_path": "/h", "forbidden_paths": []})

        assert policy.forbidden_paths == DEFAULT_FORBIDDEN_PATHS

    def test_direct_construction_keeps_baseline(self) -> None:
        policy = SafetyPolicy(home_path="/h", forbidden_paths=("./only/",))

        assert set(DEFAULT_FORBIDDEN_PATHS) <= set(policy.forbidden_paths)
        assert policy.forbidden_paths[: len(DEFAULT_FORBIDDEN_PATHS)] == DEFAULT_FORBIDDEN_PATHS

    def test_duplicates_removed(self) -> None:
        policy = merge_policy({"home_path": "/h", "forbidden_paths": ["/etc/", "./x/", "./x/"]})

        assert policy.forbidden_paths.count("/etc/") == 1
        assert policy.forbidden_paths.count("./x/") == 1


class TestReplaceFields:
    """allowed_paths, max_depth, allowed_operations and read_only replace defaults."""

    def test_allowed_paths_replace(self) -> None:
        policy = merge_policy({"home_path": "/h", "allowed_paths": ["./a/", "./b/"]})

        assert policy.allowed_paths == ("./a/", "./b/")
        assert not policy.allow_all_paths

    def test_allowed_operations_replace(self) -> None:
        policy = merge_policy({"home_path": "/h", "allowed_operations": ["read-file", "write-file"]})

        assert policy.allowed_operations == (Operation.READ_FILE, Operation.WRITE_FILE)

    def test_empty_operations_list_permits_nothing(self) -> None:
        policy = merge_policy({"home_path": "/h", "allowed_operations": []})

        assert policy.effective_operations == frozenset()

    def test_read_only_narrows_effective_operations(self) -> None:
        policy = merge_policy({"home_path": "/h", "read_only": True})

        assert policy.effective_operations == {
            Operation.READ_FILE,
            Operation.CHECK_EXISTS,
            Operation.LIST_DIRECTORY,
        }

    def test_read_only_intersects_with_allowlist(self) -> None:
        policy = merge_policy(
            {"home_path": "/h", "read_only": True, "allowed_operations": ["read-file", "write-file"]}
        )

        assert policy.effective_operations == {Operation.READ_FILE}


class TestValidation:
    """Invalid configuration is rejected at merge time."""

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            merge_policy({"home_path": "/h", "allowed_path": ["./a/"]})

    def test_unknown_operation_rejected(self) -> None:
        with pytest.raises(ValidationError):
            merge_policy({"home_path": "/h", "allowed_operations": ["format-disk"]})

    @pytest.mark.parametrize("depth", [0, -1])
    def test_non_positive_max_depth_rejected(self, depth: int) -> None:
        with pytest.raises(ValidationError):
            merge_policy({"home_path": "/h", "max_depth": depth})

    def test_blank_entries_rejected(self) -> None:
        with pytest.raises(ValidationError, match="empty or whitespace-only"):
            SafetyConfig(allowed_paths=["./a/", " "])

    def test_null_byte_entries_rejected(self) -> None:
        with pytest.raises(ValidationError, match="null bytes"):
            SafetyConfig(forbidden_paths=["./a\x00b/"])

    def test_policy_is_frozen(self) -> None:
        policy = merge_policy({"home_path": "/h"})

        with pytest.raises(ValidationError):
            policy.max_depth = 99  # type: ignore[misc]

    def test_direct_policy_requires_absolute_home(self) -> None:
        with pytest.raises(ValidationError, match="must be absolute"):
            SafetyPolicy(home_path="relative/home")


class TestSummary:
    """Tests for SafetyPolicy.to_summary()."""

    def test_summary_is_json_compatible(self) -> None:
        policy = merge_policy({"home_path": "/h", "allowed_operations": ["read-file"]})

        summary = policy.to_summary()

        assert summary["home_path"] == "/h"
        assert summary["allowed_operations"] == ["read-file"]
        assert summary["forbidden_paths"] == list(DEFAULT_FORBIDDEN_PATHS)
