"""Shared file utilities for fs-acp.

Provides common utilities used by config loading and the CLI:
- get_app_dir: OS-appropriate application directory
- set_secure_permissions: Owner-only file/directory permissions
- require_file_exists: FileNotFoundError with an init hint
- load_validated_json: JSON + Pydantic validation with readable errors
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TypeVar

import click
from pydantic import BaseModel, ValidationError

from fs_acp.constants import APP_NAME

# Type variable for Pydantic models
T = TypeVar("T", bound=BaseModel)

__all__ = [
    "get_app_dir",
    "load_validated_json",
    "require_file_exists",
    "set_secure_permissions",
]


def get_app_dir() -> Path:
    """Get the OS-appropriate application directory.

    Uses click.get_app_dir() which returns:
    - macOS: ~/Library/Application Support/fs-acp
    - Linux: ~/.config/fs-acp (XDG compliant)
    - Windows: C:\\Users\\<user>\\AppData\\Roaming\\fs-acp

    Returns:
        Path to the application directory.
    """
    return Path(click.get_app_dir(APP_NAME))


def set_secure_permissions(path: Path, *, is_directory: bool = False) -> None:
    """Set owner-only permissions on a file or directory.

    - Directory: 0o700 (rwx------)
    - File: 0o600 (rw-------)

    Does nothing on Windows. Silently ignores permission errors
    (some systems don't allow permission changes).

    Args:
        path: Path to file or directory.
        is_directory: If True, use directory permissions (0o700).
    """
    if sys.platform == "win32":
        return

    try:
        path.chmod(0o700 if is_directory else 0o600)
    except OSError:
        pass  # Permission changes might fail on some systems


def require_file_exists(
    file_path: Path,
    file_type: str = "file",
    init_hint: bool = True,
) -> None:
    """Raise FileNotFoundError with helpful message if file doesn't exist.

    Args:
        file_path: Path to check.
        file_type: Description for error message (e.g., "configuration").
        init_hint: If True, suggest running 'fs-acp policy init'.

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if file_path.exists():
        return

    hint = f"\nRun '{APP_NAME} policy init' to create a {file_type} file." if init_hint else ""
    raise FileNotFoundError(f"{file_type.capitalize()} file not found at {file_path}.{hint}")


def load_validated_json(
    file_path: Path,
    model_class: type[T],
    file_type: str = "file",
    encoding: str | None = "utf-8",
) -> T:
    """Load JSON file and validate against Pydantic model.

    Args:
        file_path: Path to JSON file.
        model_class: Pydantic model class to validate against.
        file_type: Description for error messages (e.g., "config").
        encoding: File encoding.

    Returns:
        Validated Pydantic model instance.

    Raises:
        ValueError: If JSON is invalid or validation fails.
    """
    try:
        with open(file_path, "r", encoding=encoding) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {file_path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {file_path}: {e}") from e

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")
        raise ValueError(f"Invalid {file_type} file {file_path}:\n" + "\n".join(errors)) from e
