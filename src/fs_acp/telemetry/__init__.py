"""Telemetry for fs-acp.

Structure:
    models.py          - DecisionEvent (one audit record per decision)
    decision_logger.py - DecisionEventLogger writing decisions.jsonl
    system_logger.py   - Singleton operational logger (stderr)
"""

from fs_acp.telemetry.decision_logger import DecisionEventLogger, create_decision_logger
from fs_acp.telemetry.models import DecisionEvent
from fs_acp.telemetry.system_logger import get_system_logger

__all__ = [
    "DecisionEvent",
    "DecisionEventLogger",
    "create_decision_logger",
    "get_system_logger",
]
