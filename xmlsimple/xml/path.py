"""
Path expression handling for xmlsimple.

A path is a sequence of tag names joined by "." or "->", for example
``order.customer.name`` or ``order->customer->name``. A segment written as
``prefix:name`` addresses a child in the namespace bound to ``prefix``.
"""

from typing import List, NamedTuple, Optional, Sequence

from xmlsimple.core.constants import ARROW_SEPARATOR, NAMESPACE_SEPARATOR, PATH_SEPARATOR


class PathSegment(NamedTuple):
    """One step of a path: a local tag name and an optional namespace prefix."""

    name: str
    prefix: Optional[str] = None

    def __str__(self) -> str:
        if self.prefix is None:
            return self.name
        return f"{self.prefix}{NAMESPACE_SEPARATOR}{self.name}"


def normalize_path(path: str) -> str:
    """Replace arrow separators with dots."""
    return path.replace(ARROW_SEPARATOR, PATH_SEPARATOR)


def is_root_path(path: str) -> bool:
    """
    Check whether a path addresses the base node itself.

    Args:
        path: Path expression

    Returns:
        True for the empty path and for a single dot
    """
    return path in ('', PATH_SEPARATOR) or normalize_path(path) == PATH_SEPARATOR


def parse_segment(token: str) -> PathSegment:
    """Split a single path token into a segment."""
    parts = token.split(NAMESPACE_SEPARATOR)
    if len(parts) == 2:
        return PathSegment(name=parts[1], prefix=parts[0])
    return PathSegment(name=token)


def parse_path(path: str) -> List[PathSegment]:
    """
    Parse a path expression into its segments.

    Args:
        path: Path expression using "." or "->" as separator

    Returns:
        List of segments, empty if the path addresses the base node
    """
    if is_root_path(path):
        return []
    return [parse_segment(token) for token in normalize_path(path).split(PATH_SEPARATOR)]


def join_path(names: Sequence[str]) -> str:
    """Join tag names into a dot separated path."""
    return PATH_SEPARATOR.join(names)
