"""In-memory key-value storage, used by tests and when no data directory is wanted."""

from typing import Optional

from donation_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class InMemoryStorage(KeyValueStorageInterface):
    """
    Dict-backed storage.

    fail_reads / fail_writes make every read or write raise, which is how
    tests simulate an unreadable or unwritable device.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageReadError("simulated read failure")
        return self.data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError("simulated write failure")
        self.data[key] = value
        self.write_count += 1

    async def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise StorageWriteError("simulated write failure")
        self.data.pop(key, None)
