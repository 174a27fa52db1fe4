"""Policy command group for fs-acp CLI.

Provides policy configuration subcommands.
"""

from __future__ import annotations

__all__ = ["policy"]

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from fs_acp.config import AppConfig, get_config_path
from fs_acp.exceptions import ConfigurationError

from ..styling import style_dim, style_error, style_header, style_label, style_success
from ._loading import load_app_config

_CONFIG_OPTION_HELP = "Config file (default: OS config directory)"


@click.group()
def policy() -> None:
    """Policy configuration commands."""
    pass


@policy.command("show")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=_CONFIG_OPTION_HELP,
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def policy_show(config_path: Path | None, as_json: bool) -> None:
    """Show the effective policy, including merged defaults."""
    app_config = load_app_config(config_path)
    try:
        effective = app_config.build_policy()
    except ValidationError as e:
        click.echo(style_error(f"Invalid policy: {e}"), err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(effective.to_summary(), indent=2))
        return

    click.echo(style_header("Safety Policy"))
    click.echo(f"{style_label('Home path')} {effective.home_path}")
    if effective.allow_all_paths:
        click.echo(f"{style_label('Allowed paths')} {style_dim('all except forbidden')}")
    else:
        click.echo(style_label("Allowed paths"))
        for entry in effective.allowed_paths:
            click.echo(f"  {entry}")
    click.echo(style_label("Forbidden paths"))
    for entry in effective.forbidden_paths:
        click.echo(f"  {entry}")
    click.echo(f"{style_label('Max depth')} {effective.max_depth}")
    click.echo(f"{style_label('Read-only')} {'yes' if effective.read_only else 'no'}")
    click.echo(style_label("Operations"))
    for op in effective.allowed_operations:
        suffix = "" if op in effective.effective_operations else style_dim(" (blocked by read-only)")
        click.echo(f"  {op.value}{suffix}")


@policy.command("path")
def policy_path_cmd() -> None:
    """Show the default config file path."""
    path = get_config_path()
    click.echo(str(path))

    if not path.exists():
        click.echo("(file does not exist - run 'fs-acp policy init' to create)", err=True)


@policy.command("validate")
@click.option(
    "--path",
    "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Validate file at this path",
)
def policy_validate(path: Path | None) -> None:
    """Validate the config file.

    Exit codes:
        0: Config is valid
        1: Config is invalid or not found
    """
    config_path = path or get_config_path()

    try:
        app_config = AppConfig.load_from_files(config_path)
        effective = app_config.build_policy()
    except (ConfigurationError, ValidationError) as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)

    click.echo(style_success(f"Config valid: {config_path}"))
    if effective.allow_all_paths:
        click.echo("  All paths allowed except forbidden")
    else:
        click.echo(f"  {len(effective.allowed_paths)} allowed path prefix(es)")
    click.echo(f"  {len(effective.forbidden_paths)} forbidden paths (including built-in)")


@policy.command("init")
@click.option(
    "--path",
    "-p",
    type=click.Path(dir_okay=False, path_type=Path),
    help=_CONFIG_OPTION_HELP,
)
@click.option("--home", type=str, help="home_path for relative requests")
@click.option("--allow", "allowed", multiple=True, help="Allowed path prefix (repeatable)")
@click.option("--forbid", "forbidden", multiple=True, help="Extra forbidden path prefix (repeatable)")
@click.option("--max-depth", type=click.IntRange(min=1), help="Maximum depth below home_path")
@click.option("--read-only", is_flag=True, help="Enable read-only mode")
@click.option("--log-dir", type=str, help="Directory for the decision log")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def policy_init(
    path: Path | None,
    home: str | None,
    allowed: tuple[str, ...],
    forbidden: tuple[str, ...],
    max_depth: int | None,
    read_only: bool,
    log_dir: str | None,
    force: bool,
) -> None:
    """Create a config file."""
    config_path = path or get_config_path()
    if config_path.exists() and not force:
        click.echo(style_error(f"Config already exists: {config_path} (use --force to overwrite)"), err=True)
        sys.exit(1)

    data: dict[str, object] = {}
    if home:
        data["home_path"] = home
    if allowed:
        data["allowed_paths"] = list(allowed)
    if forbidden:
        data["forbidden_paths"] = list(forbidden)
    if max_depth is not None:
        data["max_depth"] = max_depth
    if read_only:
        data["read_only"] = True

    try:
        app_config = AppConfig.model_validate(
            {"safety": data, "logging": {"log_dir": log_dir} if log_dir else {}}
        )
    except ValidationError as e:
        click.echo(style_error(f"Invalid policy: {e}"), err=True)
        sys.exit(1)

    app_config.save_to_file(config_path)
    click.echo(style_success(f"Config written: {config_path}"))
