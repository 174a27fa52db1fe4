"""Decision logging for policy enforcement.

Every authorization decision (ALLOW and DENY) can be written to
<log_dir>/fs_acp_logs/decisions.jsonl as one DecisionEvent per line.
"""

from __future__ import annotations

__all__ = [
    "DecisionEventLogger",
    "create_decision_logger",
]

import logging
from pathlib import Path

from fs_acp.pdp.decision import AuthorizationResult
from fs_acp.pdp.policy import SafetyPolicy
from fs_acp.telemetry.models import DecisionEvent
from fs_acp.utils.logging.logger_setup import setup_jsonl_logger


def create_decision_logger(log_path: Path) -> logging.Logger:
    """Create logger for decision events.

    Args:
        log_path: Path to decisions.jsonl file.

    Returns:
        Configured JSONL logger.
    """
    return setup_jsonl_logger("fs-acp.audit.decisions", log_path, log_level=logging.INFO)


class DecisionEventLogger:
    """Logs authorization decisions to decisions.jsonl.

    Logging happens after the decision is made and never changes it.
    """

    def __init__(self, logger: logging.Logger, *, policy: SafetyPolicy | None = None) -> None:
        """Initialize decision event logger.

        Args:
            logger: JSONL logger for decision events.
            policy: Effective policy, recorded with each event for context.
        """
        self._logger = logger
        self._policy = policy

    @classmethod
    def for_path(cls, log_path: Path, *, policy: SafetyPolicy | None = None) -> DecisionEventLogger:
        """Create a DecisionEventLogger writing to log_path."""
        return cls(create_decision_logger(log_path), policy=policy)

    def build_event(self, result: AuthorizationResult, policy_eval_ms: float | None = None) -> DecisionEvent:
        """Convert an AuthorizationResult into a DecisionEvent."""
        return DecisionEvent(
            decision=result.decision.value,
            operation=result.operation.value if result.operation is not None else None,
            path=result.raw_path,
            resolved_path=result.resolved_path,
            reason=result.reason.value if result.reason is not None else None,
            message=result.message or None,
            depth=result.depth,
            max_depth=result.max_depth,
            home_path=self._policy.home_path if self._policy is not None else None,
            read_only=self._policy.read_only if self._policy is not None else None,
            policy_eval_ms=round(policy_eval_ms, 3) if policy_eval_ms is not None else None,
        )

    def log(self, result: AuthorizationResult, policy_eval_ms: float | None = None) -> None:
        """Log one decision.

        Args:
            result: Authorization outcome.
            policy_eval_ms: Time spent in the engine.
        """
        event = self.build_event(result, policy_eval_ms)
        self._logger.info(event.model_dump(exclude={"time"}, exclude_none=True))
