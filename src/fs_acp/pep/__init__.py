"""Policy Enforcement Point (PEP) - guards filesystem calls.

Structure:
    filesystem.py     - GuardedFileSystem wrapper and factory
"""

from fs_acp.pep.filesystem import GuardedFileSystem, create_guarded_filesystem

__all__ = [
    "GuardedFileSystem",
    "create_guarded_filesystem",
]
