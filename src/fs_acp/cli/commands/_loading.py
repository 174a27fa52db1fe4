"""Config loading shared by CLI commands."""

from __future__ import annotations

__all__ = ["load_app_config"]

import sys
from pathlib import Path

import click

from fs_acp.config import AppConfig, get_config_path
from fs_acp.exceptions import ConfigurationError

from ..styling import style_error


def load_app_config(path: Path | None) -> AppConfig:
    """Load the config file, falling back to defaults when none exists.

    An explicit --config path must exist. The default location is optional:
    without it, the built-in defaults apply.

    Exits with code 1 on an invalid file.
    """
    config_path = path or get_config_path()
    if path is None and not config_path.exists():
        return AppConfig()

    try:
        return AppConfig.load_from_files(config_path)
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)
