"""
In-memory mirror of a persisted collection.
"""

from __future__ import annotations

import copy
from typing import Any, Iterator, Mapping

from .dotpath import read_path, remove_path, split_path, write_path
from .errors import InvalidType, RequiredParameterMissing
from .values import to_plain, type_of

# Distinguishes "no value passed" from an explicit None.
MISSING: Any = object()


def validate_key(key: Any, parameter: str = "key") -> str:
    if not key:
        raise RequiredParameterMissing(parameter)
    if not isinstance(key, str):
        raise InvalidType(parameter, "string", type_of(key))
    return key


class MirrorCache:
    """
    Top-level key -> value tree, mirroring one collection.

    Every path operation rebuilds a plain-dict snapshot of the whole map, works
    on that snapshot, then stores the touched top-level subtree back. There is
    no long-lived nested object identity: callers always receive copies.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._cache: dict[str, Any] = {}
        if data:
            self.load(data)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._cache))

    @property
    def size(self) -> int:
        return len(self._cache)

    def to_object(self) -> dict[str, Any]:
        return copy.deepcopy(self._cache)

    def load(self, data: Mapping[str, Any]) -> None:
        """Replace the whole map with the top-level keys of `data`."""
        self._cache = {str(k): to_plain(v) for k, v in data.items()}

    def get(self, key: str) -> Any | None:
        path = split_path(validate_key(key))
        return read_path(self.to_object(), path)

    def set(self, key: str, value: Any = MISSING) -> dict[str, Any]:
        path = split_path(validate_key(key))
        if value is MISSING:
            raise RequiredParameterMissing("value")

        data = self.to_object()
        write_path(data, path, to_plain(value))
        self._cache[path[0]] = data[path[0]]
        return copy.deepcopy(data)

    def delete(self, key: str) -> bool:
        path = split_path(validate_key(key))
        if self.get(key) is None:
            return False

        data = self.to_object()
        remove_path(data, path)
        if len(path) == 1:
            self._cache.pop(path[0], None)
        else:
            self._cache[path[0]] = data[path[0]]
        return True

    def clear(self) -> bool:
        self._cache.clear()
        return True
