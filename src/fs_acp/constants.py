"""Application-wide constants for fs-acp.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "CONFIG_FILENAME",
    # Policy defaults
    "DEFAULT_FORBIDDEN_PATHS",
    "DEFAULT_MAX_DEPTH",
    # Logging
    "DECISIONS_LOG_FILENAME",
    "LOG_SUBDIR",
]

APP_NAME = "fs-acp"

# Config file name inside click.get_app_dir(APP_NAME)
CONFIG_FILENAME = "config.json"

# =============================================================================
# Policy defaults
# =============================================================================

# Conventional system directories. Always part of the effective denylist;
# user configuration can add entries but never remove these.
DEFAULT_FORBIDDEN_PATHS: tuple[str, ...] = (
    "/etc/",
    "/var/",
    "/usr/",
    "/sys/",
    "/proc/",
    "/bin/",
    "/sbin/",
)

# Maximum number of path segments below the home directory
DEFAULT_MAX_DEPTH = 10

# =============================================================================
# Logging
# =============================================================================

# Decision audit log: <log_dir>/fs_acp_logs/decisions.jsonl
LOG_SUBDIR = "fs_acp_logs"
DECISIONS_LOG_FILENAME = "decisions.jsonl"
