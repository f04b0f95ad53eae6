from __future__ import annotations

from typing import Any, Protocol


class DocumentCollection(Protocol):
    """
    Minimal collection interface the mirror needs: one document per top-level
    key, shaped as {"__KEY": str, "__VALUE": Any} plus backend metadata.
    """

    name: str

    async def find_all(self) -> list[dict[str, Any]]:
        """Return every document in the collection (never None)."""
        ...

    async def find_one(self, key: str) -> dict[str, Any] | None:
        """Return the document whose __KEY equals `key`, or None."""
        ...

    async def insert_one(self, key: str, value: Any) -> dict[str, Any]:
        """Insert a new document and return it, metadata included."""
        ...

    async def update_one(self, key: str, value: Any) -> bool:
        """Replace __VALUE of the matching document. False when nothing matched."""
        ...

    async def delete_one(self, key: str) -> bool:
        ...

    async def delete_many(self) -> int:
        """Drop every document and return how many were removed."""
        ...


class SyncDocumentCollection(Protocol):
    """Blocking flavour of DocumentCollection, wrapped for asyncio by repositories."""

    name: str

    def find_all(self) -> list[dict[str, Any]]: ...
    def find_one(self, key: str) -> dict[str, Any] | None: ...
    def insert_one(self, key: str, value: Any) -> dict[str, Any]: ...
    def update_one(self, key: str, value: Any) -> bool: ...
    def delete_one(self, key: str) -> bool: ...
    def delete_many(self) -> int: ...
