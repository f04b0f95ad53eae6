"""
Dot-path key/value access to a document collection, served from an
in-memory mirror and persisted one top-level key per document.
"""

from __future__ import annotations

from .cache import MirrorCache
from .client import Client
from .database import Database, DatabaseState, Latency
from .errors import (
    ConnectionNotEstablished,
    IndexOutOfRange,
    InvalidConnectionURI,
    InvalidTarget,
    InvalidType,
    OneOrMoreTypesInvalid,
    QuickMirrorError,
    RequiredParameterMissing,
    StorageError,
)
from .settings import Settings, get_settings

__all__ = [
    "Client",
    "Database",
    "DatabaseState",
    "Latency",
    "MirrorCache",
    "Settings",
    "get_settings",
    "QuickMirrorError",
    "RequiredParameterMissing",
    "InvalidType",
    "InvalidTarget",
    "OneOrMoreTypesInvalid",
    "IndexOutOfRange",
    "ConnectionNotEstablished",
    "InvalidConnectionURI",
    "StorageError",
]
