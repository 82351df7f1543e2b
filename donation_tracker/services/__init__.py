"""Services package."""

from donation_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
