"""Segment-prefix matching for allow/deny entries.

Prefixes are compared as normalized segment sequences, never as raw
strings, so "/etc/" matches "/etc/passwd" and "/etc" but not
"/etcetera/x". Trailing separators in configured entries carry no
meaning.

Configured entries are resolved the same way request paths are:
absolute entries as-is, relative entries ("./workspace/") joined onto
the home directory.
"""

from __future__ import annotations

__all__ = [
    "PathPrefix",
    "match_segment_prefix",
    "matches_allowed",
    "matches_forbidden",
    "resolve_prefix",
]

from collections.abc import Sequence
from dataclasses import dataclass

from fs_acp.pdp.canonical import CanonicalPath, split_segments


@dataclass(frozen=True, slots=True)
class PathPrefix:
    """A configured allow/deny entry resolved for segment matching.

    Attributes:
        raw: Entry as written in the configuration.
        segments: Resolved segments from the filesystem root.
        literal_segments: Lexical segments of the entry without the home join.
        is_absolute: True if the entry was written as an absolute path.
    """

    raw: str
    segments: tuple[str, ...]
    literal_segments: tuple[str, ...]
    is_absolute: bool


def resolve_prefix(entry: str, root_segments: Sequence[str]) -> PathPrefix:
    """Resolve a configured entry against the home directory.

    Args:
        entry: Configured prefix (e.g., "/etc/", "./workspace/").
        root_segments: Segments of the home directory.

    Returns:
        PathPrefix ready for matching.
    """
    is_absolute = entry.startswith("/")
    if is_absolute:
        segments = split_segments(entry)
    else:
        segments = split_segments("/".join((*root_segments, entry)))
    return PathPrefix(
        raw=entry,
        segments=segments,
        literal_segments=split_segments(entry),
        is_absolute=is_absolute,
    )


def match_segment_prefix(prefix: Sequence[str], target: Sequence[str]) -> bool:
    """Check if target starts with prefix, segment by segment.

    Args:
        prefix: Prefix segments.
        target: Target segments.

    Returns:
        True if every prefix segment equals the target segment at the same position.
    """
    if len(prefix) > len(target):
        return False
    return tuple(target[: len(prefix)]) == tuple(prefix)


def matches_forbidden(path: CanonicalPath, prefix: PathPrefix) -> bool:
    """Check a request against a forbidden entry.

    Compares both the canonical form and the literal form of the request,
    since a crafted input may differ canonically from its literal prefix.
    Literal forms are only compared when both sides are of the same kind
    (absolute vs relative).

    Args:
        path: Canonicalized request path.
        prefix: Resolved forbidden entry.

    Returns:
        True if either form falls under the entry.
    """
    if match_segment_prefix(prefix.segments, path.segments):
        return True
    if path.is_absolute_request == prefix.is_absolute:
        return match_segment_prefix(prefix.literal_segments, path.literal_segments)
    return False


def matches_allowed(path: CanonicalPath, prefix: PathPrefix) -> bool:
    """Check a request against an allowed entry.

    Absolute requests only match absolute entries: an allowlist written in
    home-relative terms does not open the door to absolute paths, even
    ones that happen to land under home.

    Args:
        path: Canonicalized request path.
        prefix: Resolved allowed entry.

    Returns:
        True if the request falls under the entry.
    """
    if path.is_absolute_request and not prefix.is_absolute:
        return False
    return match_segment_prefix(prefix.segments, path.segments)
