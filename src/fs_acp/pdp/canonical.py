"""Path canonicalization - resolve caller paths into a comparable form.

Every request path is resolved lexically against the policy's home
directory using POSIX semantics, without touching the filesystem:

- Absolute input ("/tmp/x") is normalized as-is.
- Relative input ("./a/../b") is joined onto the home directory first.
- Empty and "." segments are dropped; ".." pops the previous segment.
  A ".." at the filesystem root is dropped, exactly as "/.." == "/".

The result keeps the full segment sequence (from the filesystem root)
plus the depth below the home directory. A path that resolves outside
the home directory has no depth and is flagged out-of-root instead.

Canonicalization never rejects anything; traversal sequences are
resolved here and judged by the engine.
"""

from __future__ import annotations

__all__ = [
    "CanonicalPath",
    "canonicalize",
    "split_segments",
]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fs_acp.pdp.policy import SafetyPolicy

_SEPARATOR = "/"


def split_segments(path: str) -> tuple[str, ...]:
    """Split a path into normalized segments.

    Args:
        path: Path string (absolute or relative).

    Returns:
        Segments with empty/"." removed and ".." resolved. A ".." with
        nothing left to pop is dropped.
    """
    segments: list[str] = []
    for segment in path.split(_SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return tuple(segments)


@dataclass(frozen=True, slots=True)
class CanonicalPath:
    """A request path reduced to an unambiguous segment sequence.

    Equality compares the resolved segments and root only, so
    "./a/../a/file" and "./a/file" canonicalize to equal values.

    Attributes:
        raw: Path exactly as supplied by the caller.
        segments: Resolved segments from the filesystem root.
        root: Segments of the home directory the path was resolved against.
        is_absolute_request: True if the caller supplied an absolute path.
        depth: Segments between root and target; None when out of root.
    """

    raw: str = field(compare=False)
    segments: tuple[str, ...]
    root: tuple[str, ...]
    is_absolute_request: bool = field(compare=False)
    depth: int | None = field(compare=False)

    @property
    def path(self) -> str:
        """Absolute path string for the filesystem collaborator."""
        return _SEPARATOR + _SEPARATOR.join(self.segments)

    @property
    def out_of_root(self) -> bool:
        """True if the path resolved outside the home directory."""
        return self.depth is None

    @property
    def relative_segments(self) -> tuple[str, ...] | None:
        """Segments below the home directory (None when out of root)."""
        if self.depth is None:
            return None
        return self.segments[len(self.root) :]

    @property
    def display(self) -> str:
        """Display form: "./a/b" when inside root, absolute otherwise."""
        relative = self.relative_segments
        if relative is None:
            return self.path
        if not relative:
            return "."
        return "./" + _SEPARATOR.join(relative)

    @property
    def literal_segments(self) -> tuple[str, ...]:
        """Lexical normalization of the raw input, not joined onto the root."""
        return split_segments(self.raw)

    def __str__(self) -> str:
        return self.path


def _root_segments(root: SafetyPolicy | str) -> tuple[str, ...]:
    home = root if isinstance(root, str) else root.home_path
    return split_segments(home)


def canonicalize(raw_path: str, root: SafetyPolicy | str) -> CanonicalPath:
    """Resolve a caller-supplied path against the home directory.

    Args:
        raw_path: Path from the caller (relative or absolute, may contain "..").
        root: SafetyPolicy (its home_path is used) or an absolute home path.

    Returns:
        CanonicalPath with resolved segments and depth below the root.
    """
    root_segments = _root_segments(root)
    is_absolute = raw_path.startswith(_SEPARATOR)

    if is_absolute:
        segments = split_segments(raw_path)
    else:
        segments = split_segments(_SEPARATOR.join((*root_segments, raw_path)))

    depth: int | None = None
    if segments[: len(root_segments)] == root_segments:
        depth = len(segments) - len(root_segments)

    return CanonicalPath(
        raw=raw_path,
        segments=segments,
        root=root_segments,
        is_absolute_request=is_absolute,
        depth=depth,
    )
