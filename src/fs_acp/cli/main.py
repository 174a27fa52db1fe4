"""Main CLI entry point for fs-acp.

Defines the CLI group and registers all subcommands.

Commands:
    check   - Check a path/operation against the safety policy
    policy  - Policy configuration management (show, path, validate, init)

Subcommand help:
    fs-acp COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys

import click

from fs_acp import __version__

from .commands.check import check
from .commands.policy import policy


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Quick Start:
  fs-acp policy init                         Create a default config file
  fs-acp policy show                         Show the effective policy
  fs-acp check ./workspace/a.txt -o write-file

Operations:
  read-file, write-file, check-exists, delete-file,
  delete-directory, ensure-directory, list-directory, change-mode
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """fs-acp: Access control for AI filesystem operations."""
    if version:
        click.echo(f"fs-acp {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(check)
cli.add_command(policy)


def main() -> None:
    """CLI entry point."""
    cli()
