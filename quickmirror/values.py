"""
Type predicates shared by every path operation.
"""

from __future__ import annotations

import copy
from typing import Any

_TYPE_NAMES: tuple[tuple[type, str], ...] = (
    (bool, "boolean"),
    (int, "number"),
    (float, "number"),
    (str, "string"),
    (list, "array"),
    (tuple, "array"),
    (dict, "object"),
)


def is_object(value: Any) -> bool:
    """A plain object: a dict. Lists, None and scalars are not."""
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    """A list, or a tuple which is stored as a list."""
    return isinstance(value, (list, tuple))


def to_plain(value: Any) -> Any:
    """Deep copy of `value` with tuples turned into lists, the way the store keeps them."""
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if is_array(value):
        return [to_plain(v) for v in value]
    return copy.deepcopy(value)


def is_number(value: Any) -> bool:
    # bool is an int subclass but never counts as a number target
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_of(value: Any) -> str:
    """
    Name of the value's type as it appears in error messages.
    """
    if value is None:
        return "null"
    for cls, name in _TYPE_NAMES:
        if isinstance(value, cls):
            return name
    if callable(value):
        return "function"
    return type(value).__name__


def types_of(values: list[Any]) -> list[str]:
    return [type_of(v) for v in values]
