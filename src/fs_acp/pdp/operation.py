"""Operation kinds for filesystem requests.

One value per capability of the underlying filesystem collaborator.
Read-only mode narrows the permitted set to READ_ONLY_OPERATIONS
regardless of what allowed_operations says.
"""

from __future__ import annotations

__all__ = [
    "ALL_OPERATIONS",
    "Operation",
    "READ_ONLY_OPERATIONS",
    "parse_operation",
]

from enum import Enum


class Operation(str, Enum):
    """Filesystem operation kind.

    Inherits from str for easy serialization and comparison.
    """

    READ_FILE = "read-file"
    WRITE_FILE = "write-file"
    CHECK_EXISTS = "check-exists"
    DELETE_FILE = "delete-file"
    DELETE_DIRECTORY = "delete-directory"
    ENSURE_DIRECTORY = "ensure-directory"
    LIST_DIRECTORY = "list-directory"
    CHANGE_MODE = "change-mode"


# Default allowlist: every operation, in declaration order
ALL_OPERATIONS: tuple[Operation, ...] = tuple(Operation)

# Fixed subset permitted in read-only mode
READ_ONLY_OPERATIONS: frozenset[Operation] = frozenset(
    {Operation.READ_FILE, Operation.CHECK_EXISTS, Operation.LIST_DIRECTORY}
)


def parse_operation(value: Operation | str) -> Operation:
    """Convert a string to an Operation.

    Args:
        value: Operation member or its string value (e.g., "read-file").

    Returns:
        The matching Operation.

    Raises:
        ValueError: If the value is not a known operation kind.
    """
    if isinstance(value, Operation):
        return value
    try:
        return Operation(value)
    except ValueError:
        valid = ", ".join(op.value for op in Operation)
        raise ValueError(f"Unknown operation {value!r}. Valid operations: {valid}") from None
