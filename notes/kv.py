"""Local key-value stores that hold the serialized note state.

Both stores map string keys to string values and may enforce a byte quota,
the way a browser's local storage does for one profile.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

logger = logging.getLogger("note_manager.kv")

DEFAULT_FILENAME = "local_storage.json"


class StorageQuotaExceededError(OSError):
    """A write would push the store past its byte quota."""


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


def _used_bytes(items: dict[str, str]) -> int:
    return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in items.items())


def _check_quota(items: dict[str, str], quota_bytes: int | None) -> None:
    if quota_bytes is None:
        return
    used = _used_bytes(items)
    if used > quota_bytes:
        raise StorageQuotaExceededError(
            f"Storage quota exceeded: {used} bytes > {quota_bytes} bytes"
        )


class MemoryKeyValueStore:
    """Dictionary-backed store, lost when the process exits."""

    def __init__(
        self,
        initial: dict[str, str] | None = None,
        quota_bytes: int | None = None,
    ) -> None:
        self._items: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            updated = {**self._items, key: value}
            _check_quota(updated, self._quota_bytes)
            self._items = updated

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items = {k: v for k, v in self._items.items() if k != key}


class FileKeyValueStore:
    """Store persisted as one JSON object inside a profile directory.

    Writes go to a uniquely named temp file that replaces the real one, so a
    crash or a concurrent reader never sees a half-written file. A lock
    serializes read-modify-write cycles from threads sharing the store.
    """

    def __init__(
        self,
        directory: Path,
        quota_bytes: int | None = None,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self._path = Path(directory) / filename
        self._quota_bytes = quota_bytes
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read()
            items[key] = value
            _check_quota(items, self._quota_bytes)
            self._write(items)

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._read()
            if items.pop(key, None) is not None:
                self._write(items)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            json.dump(items, tmp, indent=2, sort_keys=True)
        try:
            os.replace(tmp.name, self._path)
        except OSError:
            os.unlink(tmp.name)
            raise
