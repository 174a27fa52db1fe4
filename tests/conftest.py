"""Shared fixtures for fs-acp tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from fs_acp.backends import MemoryFileSystem
from fs_acp.pdp import AuthorizationEngine, SafetyPolicy, merge_policy

HOME = "/home/agent"


@pytest.fixture
def home() -> str:
    """Fixed home directory so decisions never depend on the test runner's cwd."""
    return HOME


@pytest.fixture
def make_policy() -> Callable[..., SafetyPolicy]:
    """Build an effective policy rooted at HOME unless home_path is given."""

    def _make(**overrides: Any) -> SafetyPolicy:
        overrides.setdefault("home_path", HOME)
        return merge_policy(overrides)

    return _make


@pytest.fixture
def make_engine(make_policy: Callable[..., SafetyPolicy]) -> Callable[..., AuthorizationEngine]:
    """Build an AuthorizationEngine from policy overrides."""

    def _make(**overrides: Any) -> AuthorizationEngine:
        return AuthorizationEngine(make_policy(**overrides))

    return _make


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()
