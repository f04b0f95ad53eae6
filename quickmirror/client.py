from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from persistence import paths
from persistence.interfaces import DocumentCollection
from persistence.memory_store import InMemoryBackend
from persistence.repositories import DiskBackend

from .errors import ConnectionNotEstablished, InvalidConnectionURI, InvalidType
from .settings import DEFAULT_URI, Settings, get_settings
from .values import is_object, type_of

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)

MEMORY_SCHEME = "memory://"
FILE_SCHEME = "file://"


class Client:
    """
    Connection handle shared by every Database bound to it.

    `connection_uri` picks the backend:
      - "memory://"                 collections live in this process
      - "file:///some/dir" or a path  one JSON file per collection in that directory
      - "file://"                   the configured data directory
    """

    def __init__(
        self,
        connection_uri: str = DEFAULT_URI,
        initial_data: Mapping[str, Any] | None = None,
        *,
        data_dir: str | Path | None = None,
        log_writes: bool = False,
    ) -> None:
        if not isinstance(connection_uri, str):
            raise InvalidType("connection_uri", "string", type_of(connection_uri))
        if initial_data is not None and not is_object(initial_data):
            raise InvalidType("initial_data", "object", type_of(initial_data))

        self.connection_uri = connection_uri.strip() or DEFAULT_URI
        self.initial_data: dict[str, Any] | None = (
            copy.deepcopy(dict(initial_data)) if initial_data is not None else None
        )
        self.log_writes = log_writes
        self.connected = False
        self.databases: list[Database] = []

        self._data_dir = Path(data_dir) if data_dir is not None else None
        self._backend = self._backend_for(self.connection_uri)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Client":
        settings = settings or get_settings()
        return cls(
            settings.connection_uri,
            settings.load_seed(),
            data_dir=settings.data_dir,
            log_writes=settings.log_writes,
        )

    def __repr__(self) -> str:
        state = "connected" if self.connected else "disconnected"
        return f"<Client {self.connection_uri} {state} databases={len(self.databases)}>"

    @property
    def is_memory(self) -> bool:
        return isinstance(self._backend, InMemoryBackend)

    # --- lifecycle -----------------------------------------------------

    async def connect(self) -> "Client":
        if self.connected:
            return self
        if isinstance(self._backend, DiskBackend):
            try:
                self._backend.open()
            except OSError as e:
                logger.warning("CONNECT: cannot open %s: %r", self._backend.base_dir, e)
                raise ConnectionNotEstablished() from e
        self.connected = True
        logger.info("CONNECT: %s", self.connection_uri)
        return self

    async def disconnect(self) -> bool:
        if not self.connected:
            return False
        self.connected = False
        logger.info("DISCONNECT: %s", self.connection_uri)
        return True

    # --- databases -----------------------------------------------------

    def collection(self, name: str) -> DocumentCollection:
        return self._backend.collection(name)

    async def database(self, name: str, collection_name: str | None = None) -> "Database":
        """
        Return the open Database for this collection, creating and loading it
        on first use.
        """
        from .database import Database, DatabaseState

        wanted = collection_name or name
        for db in self.databases:
            if db.name == name and db.collection_name == wanted:
                if db.state is DatabaseState.UNINITIALIZED:
                    await db.load_cache()
                return db
        return await Database.create(self, name, collection_name)

    def unregister(self, database: "Database") -> None:
        if database in self.databases:
            self.databases.remove(database)

    # --- internal helpers ------------------------------------------------

    def _backend_for(self, uri: str) -> InMemoryBackend | DiskBackend:
        if uri in (MEMORY_SCHEME, "memory"):
            return InMemoryBackend()
        if uri.startswith(FILE_SCHEME):
            location = uri[len(FILE_SCHEME):]
            return DiskBackend(Path(location) if location else self._default_data_dir())
        if "://" in uri:
            raise InvalidConnectionURI(uri)
        return DiskBackend(Path(uri).expanduser())

    def _default_data_dir(self) -> Path:
        return self._data_dir if self._data_dir is not None else paths.data_dir()
