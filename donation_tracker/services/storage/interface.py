"""
Abstract Storage Interface

DESIGN DECISION: The store talks to durable storage through a tiny async
key-value interface. This allows us to:
1. Keep the JSON file backend for real use
2. Use in-memory storage for testing
3. Swap in another local backend without touching the store

Values are always strings; encoding the transaction list is the store's job.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for local key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing a missing key is not an error.

        Raises:
            StorageWriteError: If the backend could not be updated
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Storage could not be read or holds an unreadable payload."""
    pass


class StorageWriteError(StorageError):
    """Storage could not be written."""
    pass
