from __future__ import annotations

import threading
from pathlib import Path


class CollectionLockRegistry:
    """
    Hands out one lock per collection file so that concurrent worker threads
    never interleave a read-modify-write of the same file.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        key = str(path.resolve())
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())


COLLECTION_LOCKS = CollectionLockRegistry()
