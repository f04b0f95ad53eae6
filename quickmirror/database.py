"""
Dot-path key/value database over a document collection.

Reads are served from an in-memory mirror. Writes update the mirror first,
then persist the whole subtree of the touched top-level key as one
{"__KEY", "__VALUE"} document. There is no locking: two concurrent writes
under the same top-level key each persist the subtree they saw, so the last
one to reach the store wins for that key.
"""

from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel

from persistence.errors import DuplicateKeyError
from persistence.interfaces import DocumentCollection
from persistence.records import KEY_FIELD, VALUE_FIELD, strip_metadata

from .cache import MISSING, MirrorCache, validate_key
from .client import Client
from .dotpath import read_path, split_path
from .errors import (
    ConnectionNotEstablished,
    IndexOutOfRange,
    InvalidTarget,
    InvalidType,
    OneOrMoreTypesInvalid,
    RequiredParameterMissing,
)
from .values import is_array, is_number, is_object, type_of, types_of

logger = logging.getLogger(__name__)

PING_KEY = "___PING___"

Predicate = Callable[[Any], bool]


class DatabaseState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING_CACHE = "loading_cache"
    READY = "ready"
    CLOSED = "closed"


class Latency(BaseModel):
    """Milliseconds taken by one read, one write and one delete request."""

    read_latency: float
    write_latency: float
    delete_latency: float


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Database:
    """
    One logical database bound to one collection of a Client.

    Construction does no I/O; the mirror is filled by `await load_cache()`.
    `Database.create(...)` and `Client.database(...)` do both steps.

    Only `Client.database(...)` reuses an open instance for the same name and
    collection. Constructing directly always registers a new instance, and
    each one keeps its own mirror.
    """

    def __init__(self, client: Client, name: str, collection_name: str | None = None) -> None:
        if client is None:
            raise RequiredParameterMissing("client")
        if not isinstance(client, Client):
            raise InvalidType("client", "Client", type_of(client))
        validate_key(name, "name")
        if collection_name is not None and not isinstance(collection_name, str):
            raise InvalidType("collection_name", "string", type_of(collection_name))

        self.name = name
        self.collection_name = collection_name or name
        self.state = DatabaseState.UNINITIALIZED

        self._client = client
        self._collection: DocumentCollection = client.collection(self.collection_name)
        self._cache = MirrorCache()

        client.databases.append(self)

    @classmethod
    async def create(
        cls, client: Client, name: str, collection_name: str | None = None
    ) -> "Database":
        db = cls(client, name, collection_name)
        await db.load_cache()
        return db

    def __repr__(self) -> str:
        return f"<Database {self.name}/{self.collection_name} {self.state.value} size={self.size}>"

    @property
    def client(self) -> Client:
        return self._client

    @property
    def ready(self) -> bool:
        return self.state is DatabaseState.READY

    @property
    def size(self) -> int:
        return len(self._cache)

    # --- lifecycle -----------------------------------------------------

    async def load_cache(self) -> None:
        """
        Fill the mirror from the collection.

        An empty collection is seeded from the client's initial data, written
        to both the store and the mirror.
        """
        self._ensure_connected()
        self.state = DatabaseState.LOADING_CACHE
        try:
            stored = await self.all_from_database()
            seed = self._client.initial_data
            self._cache.clear()
            if seed and not stored:
                logger.info("LOAD CACHE: seeding %s with %d keys", self.collection_name, len(seed))
                for key, value in seed.items():
                    await self.set(key, value)
            else:
                self._cache.load(stored)
        except Exception:
            self.state = DatabaseState.UNINITIALIZED
            raise

        self.state = DatabaseState.READY
        logger.info("LOAD CACHE: %s ready with %d keys", self.collection_name, self.size)

    def close(self) -> None:
        """Drop the mirror and unregister from the client. Stored data is kept."""
        self._cache.clear()
        self._client.unregister(self)
        self.state = DatabaseState.CLOSED

    async def ping(self) -> Latency:
        self._ensure_connected()

        start = time.perf_counter()
        await self.raw()
        read_latency = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        await self.set(PING_KEY, 1)
        write_latency = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        await self.delete(PING_KEY)
        delete_latency = (time.perf_counter() - start) * 1000

        latency = Latency(
            read_latency=read_latency,
            write_latency=write_latency,
            delete_latency=delete_latency,
        )
        logger.debug("PING %s: %s", self.collection_name, latency)
        return latency

    # --- reads (mirror only) -------------------------------------------

    def get(self, key: str) -> Any | None:
        return self._cache.get(key)

    def fetch(self, key: str) -> Any | None:
        return self.get(key)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def includes(self, key: str) -> bool:
        return self.has(key)

    def all(self) -> dict[str, Any]:
        return self._cache.to_object()

    def keys(self, key: str | None = None) -> list[str]:
        data = self._target_object(key)
        return [k for k, v in data.items() if v is not None]

    def values(self, key: str | None = None) -> list[Any]:
        data = self._target_object(key)
        return [v for v in data.values() if v is not None]

    def random(self, key: str) -> Any | None:
        array = self.get(key)
        if not is_array(array):
            raise InvalidTarget("array", type_of(array))
        if not array:
            return None
        return array[int(random.random() * len(array))]

    def is_target_array(self, key: str) -> bool:
        return is_array(self.get(key))

    def is_target_number(self, key: str) -> bool:
        return is_number(self.get(key))

    # Predicate helpers over the top-level values.

    def find(self, predicate: Predicate) -> Any | None:
        return next((v for v in self.values() if predicate(v)), None)

    def find_index(self, predicate: Predicate) -> int:
        return next((i for i, v in enumerate(self.values()) if predicate(v)), -1)

    def filter(self, predicate: Predicate) -> list[Any]:
        return [v for v in self.values() if predicate(v)]

    def map(self, fn: Callable[[Any], Any]) -> list[Any]:
        return [fn(v) for v in self.values()]

    def some(self, predicate: Predicate) -> bool:
        return any(predicate(v) for v in self.values())

    def every(self, predicate: Predicate) -> bool:
        return all(predicate(v) for v in self.values())

    # --- reads (store only) --------------------------------------------

    async def raw(self) -> list[dict[str, Any]]:
        """Every stored document as {"__KEY", "__VALUE"}, bypassing the mirror."""
        self._ensure_connected()
        return strip_metadata(await self._collection.find_all())

    async def all_from_database(self) -> dict[str, Any]:
        return {doc[KEY_FIELD]: doc[VALUE_FIELD] for doc in await self.raw()}

    async def get_from_database(self, key: str) -> Any | None:
        path = split_path(validate_key(key))
        return read_path(await self.all_from_database(), path)

    # --- writes ----------------------------------------------------------

    async def set(self, key: str, value: Any = MISSING) -> Any:
        """
        Write `value` at `key` and persist the whole top-level subtree.

        Returns the top-level subtree when `value` is a dict or list, else `value`.
        """
        path = split_path(validate_key(key))
        if value is MISSING:
            raise RequiredParameterMissing("value")
        self._ensure_connected()

        top = path[0]
        snapshot = self._cache.set(key, value)
        await self._persist(top, snapshot[top])

        if is_object(value) or is_array(value):
            return self._cache.get(top)
        return value

    async def delete(self, key: str) -> bool:
        path = split_path(validate_key(key))
        if not self.has(key):
            return False
        self._ensure_connected()

        top = path[0]
        self._cache.delete(key)
        if len(path) == 1:
            await self._collection.delete_one(top)
        else:
            await self._collection.update_one(top, self._cache.get(top))
        return True

    async def remove(self, key: str) -> bool:
        return await self.delete(key)

    async def clear(self) -> bool:
        if not len(self._cache):
            return False
        self._ensure_connected()

        self._cache.clear()
        removed = await self._collection.delete_many()
        logger.info("CLEAR %s: removed %d documents", self.collection_name, removed)
        return True

    async def delete_all(self) -> bool:
        return await self.clear()

    # --- numbers ---------------------------------------------------------

    async def add(self, key: str, number_to_add: Any = MISSING) -> int | float:
        target = self._number_target(key)
        self._check_number(number_to_add, "number_to_add")
        return await self.set(key, target + number_to_add)

    async def subtract(self, key: str, number_to_subtract: Any = MISSING) -> int | float:
        target = self._number_target(key)
        self._check_number(number_to_subtract, "number_to_subtract")
        return await self.set(key, target - number_to_subtract)

    # --- arrays ----------------------------------------------------------

    async def push(self, key: str, *values: Any) -> list[Any]:
        target = self._array_target(key)
        if not values:
            raise RequiredParameterMissing("values")

        target.extend(values)
        await self.set(key, target)
        return target

    async def pull(self, key: str, index: Any = MISSING, value: Any = MISSING) -> list[Any]:
        """Replace the element at `index`. Negative indexes count from the end."""
        target = self._array_target(key)
        if index is MISSING or index is None:
            raise RequiredParameterMissing("index")
        if not _is_index(index):
            raise InvalidType("index", "integer", type_of(index))
        if value is MISSING:
            raise RequiredParameterMissing("value")

        position = len(target) + index if index < 0 else index
        if position < 0:
            raise IndexOutOfRange(index, len(target))
        if position >= len(target):
            target.extend([None] * (position - len(target) + 1))
        target[position] = value

        await self.set(key, target)
        return target

    async def pop(self, key: str, *indexes: Any) -> list[Any]:
        """
        Remove the elements at `indexes`, one after another.

        Each removal sees the list already shortened by the previous ones.
        A single list argument is treated as the list of indexes.
        """
        target = self._array_target(key)
        if len(indexes) == 1 and is_array(indexes[0]):
            indexes = tuple(indexes[0])
        if not indexes:
            raise RequiredParameterMissing("indexes")
        if len(indexes) == 1 and not _is_index(indexes[0]):
            raise InvalidType("index", "integer", type_of(indexes[0]))
        if not all(_is_index(i) for i in indexes):
            raise OneOrMoreTypesInvalid("indexes", "integer", types_of(list(indexes)))

        for index in indexes:
            # negative indexes before the start clamp to the first element
            position = max(len(target) + index, 0) if index < 0 else index
            if position < len(target):
                del target[position]

        await self.set(key, target)
        return target

    # --- internal helpers ------------------------------------------------

    def _ensure_connected(self) -> None:
        if not self._client.connected:
            raise ConnectionNotEstablished()

    def _target_object(self, key: str | None) -> dict[str, Any]:
        data = self.all() if not key else self.get(key)
        return data if is_object(data) else {}

    def _number_target(self, key: str) -> int | float:
        target = self.get(key)
        if target is None:
            return 0
        if not is_number(target):
            raise InvalidTarget("number", type_of(target))
        return target

    @staticmethod
    def _check_number(number: Any, parameter: str) -> None:
        if number is MISSING or number is None:
            raise RequiredParameterMissing(parameter)
        if not is_number(number):
            raise InvalidType(parameter, "number", type_of(number))

    def _array_target(self, key: str) -> list[Any]:
        target = self.get(key)
        if target is None:
            return []
        if not is_array(target):
            raise InvalidTarget("array", type_of(target))
        return target

    async def _persist(self, top: str, subtree: Any) -> None:
        """Upsert the document for one top-level key."""
        if self._client.log_writes:
            logger.debug("PERSIST %s/%s: %r", self.collection_name, top, subtree)

        existing = await self._collection.find_one(top)
        if existing is None:
            try:
                await self._collection.insert_one(top, subtree)
                return
            except DuplicateKeyError:
                # another write inserted the document while we were looking
                logger.debug("PERSIST %s/%s: lost insert race, updating", self.collection_name, top)
        await self._collection.update_one(top, subtree)
