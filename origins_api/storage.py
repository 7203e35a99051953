"""
Key-value storage backends.

The registration store only needs two calls from its backend, the same two
a browser's localStorage offers: get_item(key) and set_item(key, value).
Values are plain strings; encoding the blob is the store's job.

Two backends:
  - MemoryStorage: a dict. Data is lost on restart -- that's fine for tests
    and one-off kiosk sessions.
  - FileStorage: a single JSON file of {key: value}. Read on every access and
    rewritten whole on every write. Nothing coordinates two processes writing
    the same file; the last writer wins.

Both enforce an optional byte quota. Exceeding it raises
StorageQuotaExceeded, which nothing in the application catches.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for storage backend failures."""


class StorageQuotaExceeded(StorageError):
    """Raised when a write would push the stored data over the quota."""

    def __init__(self, key: str, needed: int, quota: int) -> None:
        self.key = key
        self.needed = needed
        self.quota = quota
        super().__init__(
            f"Writing key '{key}' needs {needed} bytes, quota is {quota} bytes"
        )


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


def _size_of(items: dict[str, str]) -> int:
    return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in items.items())


def _check_quota(items: dict[str, str], key: str, quota_bytes: int | None) -> None:
    if not quota_bytes:
        return
    needed = _size_of(items)
    if needed > quota_bytes:
        raise StorageQuotaExceeded(key, needed, quota_bytes)


class MemoryStorage:
    """In-process storage backed by a dict."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        updated = {**self._items, key: value}
        _check_quota(updated, key, self.quota_bytes)
        self._items = updated

    def __repr__(self) -> str:
        return f"MemoryStorage(keys={len(self._items)})"


class FileStorage:
    """Storage backed by one JSON object on disk.

    A missing file reads as empty. A file that isn't a JSON object of
    strings also reads as empty -- the registration store recovers from a
    bad blob the same way, so a corrupted file never stops the kiosk.
    """

    def __init__(self, path: str | Path, quota_bytes: int | None = None) -> None:
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read storage file %s (%s), treating as empty", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s is not a JSON object, treating as empty", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        _check_quota(items, key, self.quota_bytes)

        # Write errors (read-only disk, permissions) propagate to the caller.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(items, f, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"FileStorage(path={str(self.path)!r})"
