"""Check command for fs-acp CLI.

Evaluates one path/operation request against the effective policy
without touching the filesystem.
"""

from __future__ import annotations

__all__ = ["check"]

import json
import sys
import time
from pathlib import Path

import click
from pydantic import ValidationError

from fs_acp.config import get_decisions_log_path
from fs_acp.pdp import AuthorizationEngine, Operation, SafetyConfig, merge_policy
from fs_acp.telemetry.decision_logger import DecisionEventLogger
from fs_acp.telemetry.system_logger import get_system_logger, set_system_log_level

from ..styling import style_dim, style_error, style_label, style_success
from ._loading import load_app_config


@click.command("check")
@click.argument("path")
@click.option(
    "--operation",
    "-o",
    type=click.Choice([op.value for op in Operation]),
    default=Operation.READ_FILE.value,
    show_default=True,
    help="Operation to check",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: OS config directory, if present)",
)
@click.option("--home", type=str, help="Override home_path")
@click.option("--read-only", is_flag=True, help="Force read-only mode")
@click.option("--json", "as_json", is_flag=True, help="Output decision as JSON")
def check(
    path: str,
    operation: str,
    config_path: Path | None,
    home: str | None,
    read_only: bool,
    as_json: bool,
) -> None:
    """Check whether PATH may be accessed with an operation.

    Exit codes:
        0: Allowed
        1: Denied (or invalid configuration)
    """
    app_config = load_app_config(config_path)
    set_system_log_level(app_config.logging.log_level)

    overrides: dict[str, object] = {}
    if home is not None:
        overrides["home_path"] = home
    if read_only:
        overrides["read_only"] = True

    try:
        safety = SafetyConfig.model_validate({**app_config.safety.model_dump(exclude_none=True), **overrides})
        policy = merge_policy(safety)
    except ValidationError as e:
        click.echo(style_error(f"Invalid policy: {e}"), err=True)
        sys.exit(1)

    engine = AuthorizationEngine(policy)
    start = time.perf_counter()
    result = engine.authorize(path, operation)
    eval_ms = (time.perf_counter() - start) * 1000

    log_path = get_decisions_log_path(app_config.logging)
    if log_path is not None:
        try:
            decision_logger = DecisionEventLogger.for_path(log_path, policy=policy)
        except OSError as e:
            get_system_logger().warning(
                {
                    "event": "decision_log_unavailable",
                    "message": f"Decision not logged, cannot open {log_path}: {e}",
                    "log_path": str(log_path),
                }
            )
        else:
            decision_logger.log(result, policy_eval_ms=eval_ms)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.is_allowed:
        click.echo(style_success(f"ALLOW {operation} {path}"))
        click.echo(f"  {style_label('Resolved path')} {result.resolved_path}")
        if result.path is not None and result.depth is not None:
            click.echo(style_dim(f"  {result.path.display} (depth {result.depth} of {policy.max_depth})"))
    else:
        reason = result.reason.value if result.reason is not None else "denied"
        click.echo(style_error(f"DENY {operation} {path}"))
        click.echo(f"  {style_label('Reason')} {reason}")
        click.echo(style_dim(f"  {result.message}"))

    sys.exit(0 if result.is_allowed else 1)
