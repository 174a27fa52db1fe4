"""Filesystem collaborators the guard delegates to.

Structure:
    protocol.py       - AsyncFileSystem capability protocol
    memory.py         - MemoryFileSystem (in-memory, for tests and dry runs)
    local.py          - LocalFileSystem (disk-backed via asyncio.to_thread)
"""

from fs_acp.backends.local import LocalFileSystem
from fs_acp.backends.memory import MemoryFileSystem
from fs_acp.backends.protocol import AsyncFileSystem

__all__ = [
    "AsyncFileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
]
