"""Services package."""

from worktrack.services.storage import (
    CorruptedDataError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    NotFoundError,
    RecordStore,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    "CorruptedDataError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "NotFoundError",
    "RecordStore",
    "StorageError",
    "StorageUnavailableError",
]
