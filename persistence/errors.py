class StorageError(Exception):
    """Raised for persistence-level issues in a document collection."""


class DuplicateKeyError(StorageError):
    """Raised when inserting a second document with an existing __KEY."""

    def __init__(self, key: str) -> None:
        super().__init__(f"a document with __KEY {key!r} already exists")
        self.key = key
