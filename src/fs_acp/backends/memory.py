"""In-memory filesystem collaborator.

A dict-backed AsyncFileSystem for tests, demos, and dry runs. Paths are
normalized lexically ("/a/./b" == "/a/b"); relative paths are treated as
rooted at "/". Errors mirror the OSError subclasses a real filesystem
raises so callers can handle both the same way.
"""

from __future__ import annotations

__all__ = ["MemoryFileSystem"]

import errno

from fs_acp.pdp.canonical import split_segments

_DEFAULT_FILE_MODE = 0o644
_DEFAULT_DIR_MODE = 0o755


def _key(path: str) -> str:
    return "/" + "/".join(split_segments(path))


def _parent(key: str) -> str:
    return key.rsplit("/", 1)[0] or "/"


class MemoryFileSystem:
    """Dict-backed async filesystem.

    Files are stored as text. Writing a file creates missing parent
    directories, matching the behavior the guard's callers expect from
    in-memory stores.
    """

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self._dirs: set[str] = {"/"}
        self._modes: dict[str, int] = {"/": _DEFAULT_DIR_MODE}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _make_dirs(self, key: str) -> None:
        segments = split_segments(key)
        current = ""
        for segment in segments:
            current = f"{current}/{segment}"
            if current in self._files:
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", current)
            if current not in self._dirs:
                self._dirs.add(current)
                self._modes[current] = _DEFAULT_DIR_MODE

    def _children(self, key: str) -> list[str]:
        prefix = key.rstrip("/") + "/"
        return [p for p in (*self._files, *self._dirs) if p != key and p.startswith(prefix)]

    # ------------------------------------------------------------------
    # AsyncFileSystem
    # ------------------------------------------------------------------

    async def read_file(self, path: str) -> str:
        key = _key(path)
        if key in self._dirs:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
        try:
            return self._files[key]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path) from None

    async def write_file(self, path: str, content: str) -> None:
        key = _key(path)
        if key in self._dirs:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
        self._make_dirs(_parent(key))
        self._files[key] = content
        self._modes.setdefault(key, _DEFAULT_FILE_MODE)

    async def exists(self, path: str) -> bool:
        key = _key(path)
        return key in self._files or key in self._dirs

    async def delete_file(self, path: str) -> None:
        key = _key(path)
        if key in self._dirs:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", path)
        if key not in self._files:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        del self._files[key]
        self._modes.pop(key, None)

    async def delete_dir(self, path: str) -> None:
        key = _key(path)
        if key in self._files:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        if key not in self._dirs:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        for child in self._children(key):
            self._files.pop(child, None)
            self._dirs.discard(child)
            self._modes.pop(child, None)
        if key != "/":
            self._dirs.discard(key)
            self._modes.pop(key, None)

    async def ensure_dir(self, path: str) -> None:
        self._make_dirs(_key(path))

    async def read_dir(self, path: str) -> list[str]:
        key = _key(path)
        if key in self._files:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        if key not in self._dirs:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        depth = len(split_segments(key)) + 1
        return sorted(
            child.rsplit("/", 1)[1] for child in self._children(key) if len(split_segments(child)) == depth
        )

    async def chmod(self, path: str, mode: int) -> None:
        key = _key(path)
        if key not in self._files and key not in self._dirs:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        self._modes[key] = mode

    # ------------------------------------------------------------------
    # Inspection (not part of AsyncFileSystem)
    # ------------------------------------------------------------------

    def get_mode(self, path: str) -> int:
        """Return the stored permission mode for a path."""
        key = _key(path)
        try:
            return self._modes[key]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path) from None
