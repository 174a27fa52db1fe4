"""Application configuration for fs-acp.

Defines configuration models for the safety policy and logging. The config
file is JSON stored at the OS-appropriate location (via click.get_app_dir)
unless a path is given explicitly.

Example config.json:
    {
      "safety": {
        "home_path": "/srv/agent",
        "allowed_paths": ["./workspace/"],
        "forbidden_paths": ["./workspace/secret/"],
        "max_depth": 5,
        "allowed_operations": ["read-file", "write-file"],
        "read_only": false
      },
      "logging": {"log_dir": "~/.local/state", "log_level": "INFO"}
    }

Example usage:
    config = AppConfig.load_from_files(config_path)
    policy = config.build_policy()
    config.save_to_file(config_path)
"""

from __future__ import annotations

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "get_config_path",
    "get_decisions_log_path",
]

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fs_acp.constants import CONFIG_FILENAME, DECISIONS_LOG_FILENAME, LOG_SUBDIR
from fs_acp.exceptions import ConfigurationError
from fs_acp.pdp.policy import SafetyConfig, SafetyPolicy, merge_policy
from fs_acp.utils.file_helpers import (
    get_app_dir,
    load_validated_json,
    require_file_exists,
    set_secure_permissions,
)


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    When log_dir is set, every authorization decision is appended to
    <log_dir>/fs_acp_logs/decisions.jsonl. Without it, decisions are
    not persisted.

    Attributes:
        log_dir: Base directory for logs (None disables the decision log).
        log_level: Logging level (DEBUG or INFO) for the system logger.
    """

    log_dir: str | None = Field(default=None, min_length=1)
    log_level: Literal["DEBUG", "INFO"] = "INFO"

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    """Main application configuration for fs-acp.

    Attributes:
        safety: Partial safety configuration, merged over defaults at runtime.
        logging: Logging configuration.
    """

    safety: SafetyConfig = Field(default_factory=SafetyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    def build_policy(self, *, cwd: str | None = None) -> SafetyPolicy:
        """Merge the safety section over defaults.

        Args:
            cwd: Working directory used when home_path is unset or relative.

        Returns:
            Frozen effective SafetyPolicy.
        """
        return merge_policy(self.safety, cwd=cwd)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file.

        Creates parent directories if they don't exist and sets
        owner-only permissions on the file.

        Args:
            config_path: Path where the config JSON file should be saved.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json", exclude_none=True), f, indent=2)
            f.write("\n")

        set_secure_permissions(config_path)

    @classmethod
    def load_from_files(cls, config_path: Path) -> AppConfig:
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config JSON file.

        Returns:
            AppConfig instance with loaded configuration.

        Raises:
            ConfigurationError: If the file is missing, unreadable, or invalid.
        """
        try:
            require_file_exists(config_path, file_type="configuration")
            return load_validated_json(config_path, cls, file_type="config")
        except (FileNotFoundError, ValueError) as e:
            raise ConfigurationError(str(e)) from e


def get_config_path() -> Path:
    """Get the default config file path.

    Returns:
        Path to config.json in the OS-appropriate application directory.
    """
    return get_app_dir() / CONFIG_FILENAME


def get_decisions_log_path(logging_config: LoggingConfig) -> Path | None:
    """Get the decision audit log path.

    Args:
        logging_config: Logging section of the app config.

    Returns:
        Path to decisions.jsonl, or None if log_dir is not configured.
    """
    if logging_config.log_dir is None:
        return None
    return Path(logging_config.log_dir).expanduser() / LOG_SUBDIR / DECISIONS_LOG_FILENAME
