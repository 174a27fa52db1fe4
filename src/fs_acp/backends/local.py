"""Disk-backed filesystem collaborator.

Thin async wrapper over pathlib. Blocking calls run in a worker thread
via asyncio.to_thread so the event loop is never blocked. Errors from the
OS propagate unchanged.
"""

from __future__ import annotations

__all__ = ["LocalFileSystem"]

import asyncio
import shutil
from pathlib import Path


class LocalFileSystem:
    """AsyncFileSystem backed by the local disk.

    Args:
        encoding: Text encoding for read_file/write_file (default UTF-8).
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    async def read_file(self, path: str) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding=self._encoding)

    async def write_file(self, path: str, content: str) -> None:
        await asyncio.to_thread(Path(path).write_text, content, encoding=self._encoding)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    async def delete_file(self, path: str) -> None:
        await asyncio.to_thread(Path(path).unlink)

    async def delete_dir(self, path: str) -> None:
        await asyncio.to_thread(shutil.rmtree, path)

    async def ensure_dir(self, path: str) -> None:
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)

    async def read_dir(self, path: str) -> list[str]:
        def _list() -> list[str]:
            return sorted(entry.name for entry in Path(path).iterdir())

        return await asyncio.to_thread(_list)

    async def chmod(self, path: str, mode: int) -> None:
        await asyncio.to_thread(Path(path).chmod, mode)
