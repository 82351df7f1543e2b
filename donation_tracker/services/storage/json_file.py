"""
JSON File Storage Implementation

DESIGN DECISION: All keys live in one small JSON object file because:
1. The data is personal-finance scale (hundreds of entries, not millions)
2. Users can open and back up a single file
3. No database setup required

TRADEOFFS:
- Every write rewrites the whole file (fine at this scale)
- Single local writer only; concurrent writers are last-writer-wins

Writes go to a .tmp sibling first and are moved into place with
os.replace(), so a crash mid-write never leaves a half-written file.
"""

import json
import os
from pathlib import Path
from typing import Optional

from donation_tracker.config import get_settings
from donation_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class JsonFileStorage(KeyValueStorageInterface):
    """
    Key-value storage backed by a JSON object file.

    The file maps each key to its string value, e.g.
    {"transactions": "[...]", "theme": "dark"}.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path else get_settings().storage.storage_path

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Read the whole file; a missing file is an empty store."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}")

        if not isinstance(data, dict):
            raise StorageReadError(
                f"Storage file {self._path} does not hold a JSON object"
            )
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StorageWriteError(f"Failed to write {self._path}: {e}")

    async def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageReadError(f"Value under {key!r} is not a string")
        return value

    async def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageReadError as e:
            # Refuse to overwrite a file we could not understand
            raise StorageWriteError(str(e))
        data[key] = value
        self._write_all(data)

    async def remove_item(self, key: str) -> None:
        try:
            data = self._read_all()
        except StorageReadError as e:
            raise StorageWriteError(str(e))
        if key in data:
            del data[key]
            self._write_all(data)
