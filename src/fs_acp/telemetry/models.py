"""Pydantic models for the decision audit log (decisions.jsonl).

The 'time' field is None when a model is created; ISO8601Formatter adds
the timestamp during serialization, so logged events always carry one.
"""

from __future__ import annotations

__all__ = ["DecisionEvent"]

from typing import Literal

from pydantic import BaseModel, Field


class DecisionEvent(BaseModel):
    """One authorization decision (decisions.jsonl).

    Note: 'time' is None when created, populated by ISO8601Formatter during logging.
    """

    time: str | None = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )
    event: Literal["authorization_decision"] = "authorization_decision"

    decision: Literal["allow", "deny"]
    operation: str | None = None
    path: str | None = None  # as supplied by the caller
    resolved_path: str | None = None  # canonical absolute path
    reason: Literal["operation-not-permitted", "path-not-permitted", "path-too-deep"] | None = None
    message: str | None = None

    depth: int | None = None
    max_depth: int | None = None
    home_path: str | None = None
    read_only: bool | None = None

    policy_eval_ms: float | None = None
