from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from .disk_store import DiskJsonDocumentCollection
from .interfaces import DocumentCollection, SyncDocumentCollection
from .paths import collection_file, ensure_dir

logger = logging.getLogger(__name__)


class AsyncDocumentCollection(DocumentCollection):
    """
    Async wrapper around a blocking collection.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, inner: SyncDocumentCollection) -> None:
        self._inner = inner
        self.name = inner.name

    async def find_all(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._inner.find_all)

    async def find_one(self, key: str) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._inner.find_one, key)

    async def insert_one(self, key: str, value: Any) -> dict[str, Any]:
        return await asyncio.to_thread(self._inner.insert_one, key, value)

    async def update_one(self, key: str, value: Any) -> bool:
        return await asyncio.to_thread(self._inner.update_one, key, value)

    async def delete_one(self, key: str) -> bool:
        return await asyncio.to_thread(self._inner.delete_one, key)

    async def delete_many(self) -> int:
        return await asyncio.to_thread(self._inner.delete_many)


class DiskBackend:
    """
    Holds every collection of one `file://` connection: one JSON file per
    collection inside `base_dir`.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)

    def open(self) -> None:
        ensure_dir(self.base_dir)

    def collection(self, name: str) -> AsyncDocumentCollection:
        path = collection_file(self.base_dir, name)
        logger.debug("DISK BACKEND: collection %s -> %s", name, path)
        return AsyncDocumentCollection(DiskJsonDocumentCollection(path, name=name))
