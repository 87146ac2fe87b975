"""
Abstract Storage Interface

DESIGN DECISION: The record store never talks to a concrete backend.
It sees a flat key-value namespace of strings. This allows us to:
1. Use an in-memory namespace for testing
2. Persist to a JSON file for local deployments
3. Swap in any other string-valued store later

The interface is intentionally tiny - get, set, remove, keys.
Everything above it (collections, cascades, sessions) lives in
RecordStore.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for the persistence substrate.

    Values are opaque strings; callers handle their own encoding.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the write fails. The previous value must
                          still be readable afterwards.
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is not an error."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every key currently present."""
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class CorruptedDataError(StorageError):
    """A stored value could not be decoded into the expected shape."""
    pass


class StorageUnavailableError(StorageError):
    """The storage backend could not be read or written."""
    pass
