"""CLI output styling utilities.

- Cyan bold for section headers and labels
- Green for success/allow messages (with checkmark)
- Red for error/deny messages (with cross)
- Dim for secondary details
"""

from __future__ import annotations

__all__ = [
    "style_dim",
    "style_error",
    "style_header",
    "style_label",
    "style_success",
]

import click


def style_header(title: str) -> str:
    """Style a section header with dashes.

    Example:
        >>> click.echo(style_header("Safety Policy"))
        --- Safety Policy ---
    """
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_label(label: str) -> str:
    """Style a label with cyan bold and colon suffix."""
    return click.style(f"{label}:", fg="cyan", bold=True)


def style_success(message: str) -> str:
    """Style a success message with checkmark."""
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    """Style an error message with cross mark."""
    return click.style(f"✗ {message}", fg="red")


def style_dim(message: str) -> str:
    return click.style(message, dim=True)
