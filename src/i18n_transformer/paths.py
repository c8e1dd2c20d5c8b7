"""Dotted path helpers."""

import re
from typing import List, Optional, Sequence

from .types import MalformedPathError


SEPARATOR = "."
_INDEX_RE = re.compile(r"[0-9]+")


def is_index(segment: str) -> bool:
    """Return True when a path segment addresses a sequence position."""
    return bool(_INDEX_RE.fullmatch(segment))


def split_path(path: str) -> List[str]:
    """
    Split a dotted path into its segments.

    The whole path is trimmed first; an empty or whitespace-only path
    yields no segments. Segments themselves are not trimmed, so
    ``"a..b"`` keeps its empty middle segment for validation.
    """
    path = str(path).strip()
    if not path:
        return []
    return path.split(SEPARATOR)


def join_path(prefix: str, segment: str) -> str:
    return f"{prefix}{SEPARATOR}{segment}" if prefix else segment


def canonical_segment(segment: str) -> str:
    """Normalize index segments so that "01" and "1" address the same slot."""
    return str(int(segment)) if is_index(segment) else segment


def index_exceeds(segment: str, limit: int) -> bool:
    """Return True when an index segment is larger than ``limit``."""
    digits = segment.lstrip("0")
    # Compare lengths first so huge indices are never converted to int
    if len(digits) != len(str(limit)):
        return len(digits) > len(str(limit))
    return int(digits or "0") > limit


def validate_segments(path: str, segments: Sequence[str], max_index: Optional[int] = None) -> None:
    """
    Raise MalformedPathError if any segment is empty or an index is too large.

    Args:
        path: Full path, used in the error message
        segments: Result of split_path(path)
        max_index: Largest accepted index segment (None = unbounded)
    """
    for position, segment in enumerate(segments):
        if segment == "":
            raise MalformedPathError(
                f"Path '{path}' has an empty segment at position {position}",
                path,
            )
        if max_index is not None and is_index(segment) and index_exceeds(segment, max_index):
            raise MalformedPathError(
                f"Path '{path}' has index {segment} at position {position}, "
                f"above the limit of {max_index}",
                path,
            )
