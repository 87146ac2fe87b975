"""
Storage Services Package

Provides the key-value persistence interface, its in-memory and
JSON-file backends, and the RecordStore built on top of them.
"""

from worktrack.services.storage.interface import (
    CorruptedDataError,
    KeyValueStore,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)
from worktrack.services.storage.memory import InMemoryKeyValueStore
from worktrack.services.storage.json_file import JsonFileKeyValueStore
from worktrack.services.storage.record_store import (
    CURRENT_USER,
    DEFAULT_USERS,
    EOD_REPORTS,
    PLANNED_TASKS,
    USERS,
    RecordStore,
)

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "CorruptedDataError",
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
    # Backends
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Record store
    "CURRENT_USER",
    "DEFAULT_USERS",
    "EOD_REPORTS",
    "PLANNED_TASKS",
    "USERS",
    "RecordStore",
]
