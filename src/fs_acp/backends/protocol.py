"""Protocol definition for filesystem collaborators.

Defines the capability set the guarded filesystem delegates to. Any
implementation (in-memory, disk-backed, object-store) satisfies it by
structural subtyping; no inheritance from our code is needed.

Example adapter:

    class S3FileSystem:
        async def read_file(self, path: str) -> str:
            obj = await self._client.get_object(Bucket=self._bucket, Key=path.lstrip("/"))
            return (await obj["Body"].read()).decode()
        ...
"""

from __future__ import annotations

__all__ = ["AsyncFileSystem"]

from typing import Protocol, runtime_checkable


@runtime_checkable
class AsyncFileSystem(Protocol):
    """Async filesystem capability set.

    Paths passed in by the guarded filesystem are always absolute and
    canonical. Implementations raise their own errors (typically OSError
    subclasses); the guard passes them through unmodified.
    """

    async def read_file(self, path: str) -> str:
        """Read a file's text content."""
        ...

    async def write_file(self, path: str, content: str) -> None:
        """Write text content to a file, replacing existing content."""
        ...

    async def exists(self, path: str) -> bool:
        """Check whether a file or directory exists."""
        ...

    async def delete_file(self, path: str) -> None:
        """Delete a file."""
        ...

    async def delete_dir(self, path: str) -> None:
        """Delete a directory and everything under it."""
        ...

    async def ensure_dir(self, path: str) -> None:
        """Create a directory, including missing intermediate directories."""
        ...

    async def read_dir(self, path: str) -> list[str]:
        """List the names of a directory's immediate entries."""
        ...

    async def chmod(self, path: str, mode: int) -> None:
        """Change a path's permission mode."""
        ...
