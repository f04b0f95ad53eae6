"""
Dot-path helpers over plain dict trees.

A dot-path such as "user.profile.name" is split on "." into segments. The
first segment names the top-level key; the rest descend through dicts.
"""

from __future__ import annotations

from typing import Any

from .values import is_object

SEPARATOR = "."


def split_path(key: str) -> list[str]:
    return key.split(SEPARATOR)


def read_path(root: dict[str, Any], path: list[str]) -> Any | None:
    """
    Return the value at `path`, or None when any segment is unreachable.

    A missing key and a stored None read the same.
    """
    current: Any = root
    for segment in path:
        if not is_object(current):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current


def write_path(root: dict[str, Any], path: list[str], value: Any) -> None:
    """
    Assign `value` at `path`, replacing every non-dict intermediate with {}.

    Lists and scalars found mid-path are overwritten.
    """
    current = root
    for segment in path[:-1]:
        if not is_object(current.get(segment)):
            current[segment] = {}
        current = current[segment]
    current[path[-1]] = value


def remove_path(root: dict[str, Any], path: list[str]) -> bool:
    """
    Delete the last segment of `path` if it is reachable.

    Returns whether a non-None value was there before removal.
    """
    current: Any = root
    for segment in path[:-1]:
        current = current.get(segment) if is_object(current) else None
        if not is_object(current):
            return False
    existed = current.get(path[-1]) is not None
    current.pop(path[-1], None)
    return existed
