"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The JSON file backend is used by the app; the in-memory one by tests.
"""

from donation_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from donation_tracker.services.storage.json_file import JsonFileStorage
from donation_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
