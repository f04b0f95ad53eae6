"""
In-process document collections.

Used for `memory://` connections and as the default backend in tests. Values
are deep-copied on the way in and out so callers never share state with the
stored documents, the same way a real database would hand back fresh objects.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from .errors import DuplicateKeyError
from .records import VALUE_FIELD, VERSION_FIELD, new_stored_document

logger = logging.getLogger(__name__)


class InMemoryDocumentCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        # __KEY -> stored document; dicts keep insertion order like a collection scan
        self._docs: dict[str, dict[str, Any]] = {}

    async def find_all(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self._docs.values()]

    async def find_one(self, key: str) -> dict[str, Any] | None:
        doc = self._docs.get(key)
        return copy.deepcopy(doc) if doc is not None else None

    async def insert_one(self, key: str, value: Any) -> dict[str, Any]:
        if key in self._docs:
            raise DuplicateKeyError(key)
        doc = new_stored_document(key, copy.deepcopy(value))
        self._docs[key] = doc
        return copy.deepcopy(doc)

    async def update_one(self, key: str, value: Any) -> bool:
        doc = self._docs.get(key)
        if doc is None:
            return False
        doc[VALUE_FIELD] = copy.deepcopy(value)
        doc[VERSION_FIELD] = int(doc.get(VERSION_FIELD, 0)) + 1
        return True

    async def delete_one(self, key: str) -> bool:
        return self._docs.pop(key, None) is not None

    async def delete_many(self) -> int:
        removed = len(self._docs)
        self._docs.clear()
        return removed


class InMemoryBackend:
    """
    Holds every collection of one `memory://` connection: name -> collection.
    """

    def __init__(self) -> None:
        self._collections: dict[str, InMemoryDocumentCollection] = {}

    def collection(self, name: str) -> InMemoryDocumentCollection:
        coll = self._collections.get(name)
        if coll is None:
            logger.debug("MEMORY BACKEND: creating collection %s", name)
            coll = InMemoryDocumentCollection(name)
            self._collections[name] = coll
        return coll

    def collection_names(self) -> list[str]:
        return list(self._collections)


__all__ = ["InMemoryBackend", "InMemoryDocumentCollection"]
