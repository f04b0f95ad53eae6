from __future__ import annotations

from .disk_store import DiskJsonDocumentCollection
from .errors import DuplicateKeyError, StorageError
from .interfaces import DocumentCollection, SyncDocumentCollection
from .memory_store import InMemoryBackend, InMemoryDocumentCollection
from .records import InternalRecord, strip_metadata
from .repositories import AsyncDocumentCollection, DiskBackend

__all__ = [
    "DocumentCollection",
    "SyncDocumentCollection",
    "InMemoryBackend",
    "InMemoryDocumentCollection",
    "DiskJsonDocumentCollection",
    "AsyncDocumentCollection",
    "DiskBackend",
    "InternalRecord",
    "strip_metadata",
    "StorageError",
    "DuplicateKeyError",
]
