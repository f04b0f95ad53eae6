from __future__ import annotations

from pathlib import Path
from typing import Any

from json_store import atomic_write_json, read_json

from .errors import DuplicateKeyError, StorageError
from .locks import COLLECTION_LOCKS
from .records import KEY_FIELD, VALUE_FIELD, VERSION_FIELD, new_stored_document


class DiskJsonDocumentCollection:
    """
    Stores one collection as a single JSON file on disk:
      { "collection": "<name>", "documents": [ {"_id", "__KEY", "__VALUE", "__v"}, ... ] }

    - A missing/empty/invalid file reads as an empty collection.
    - Every mutation is a locked read-modify-write followed by an atomic replace.
    """

    def __init__(self, path: Path, name: str | None = None):
        self._path = path
        self.name = name or path.stem

    # --- whole-file helpers -------------------------------------------------

    def _load_docs(self) -> list[dict[str, Any]]:
        raw = read_json(self._path)
        if raw is None:
            return []
        if not isinstance(raw, dict) or not isinstance(raw.get("documents"), list):
            raise StorageError(f"not a collection file: {self._path}")
        return [doc for doc in raw["documents"] if isinstance(doc, dict) and KEY_FIELD in doc]

    def _save_docs(self, docs: list[dict[str, Any]]) -> None:
        atomic_write_json(self._path, {"collection": self.name, "documents": docs})

    # --- collection API -------------------------------------------------------

    def find_all(self) -> list[dict[str, Any]]:
        with COLLECTION_LOCKS.lock_for(self._path):
            return self._load_docs()

    def find_one(self, key: str) -> dict[str, Any] | None:
        with COLLECTION_LOCKS.lock_for(self._path):
            return next((doc for doc in self._load_docs() if doc[KEY_FIELD] == key), None)

    def insert_one(self, key: str, value: Any) -> dict[str, Any]:
        with COLLECTION_LOCKS.lock_for(self._path):
            docs = self._load_docs()
            if any(doc[KEY_FIELD] == key for doc in docs):
                raise DuplicateKeyError(key)
            doc = new_stored_document(key, value)
            docs.append(doc)
            self._save_docs(docs)
            return doc

    def update_one(self, key: str, value: Any) -> bool:
        with COLLECTION_LOCKS.lock_for(self._path):
            docs = self._load_docs()
            for doc in docs:
                if doc[KEY_FIELD] == key:
                    doc[VALUE_FIELD] = value
                    doc[VERSION_FIELD] = int(doc.get(VERSION_FIELD, 0)) + 1
                    self._save_docs(docs)
                    return True
            return False

    def delete_one(self, key: str) -> bool:
        with COLLECTION_LOCKS.lock_for(self._path):
            docs = self._load_docs()
            kept = [doc for doc in docs if doc[KEY_FIELD] != key]
            if len(kept) == len(docs):
                return False
            self._save_docs(kept)
            return True

    def delete_many(self) -> int:
        with COLLECTION_LOCKS.lock_for(self._path):
            removed = len(self._load_docs())
            self._save_docs([])
            return removed
