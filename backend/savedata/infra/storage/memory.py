from __future__ import annotations

import logging
import threading

from savedata.domain.errors import PersistenceError
from savedata.infra.ports.storage import StoragePort

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"


class MemoryStore:
    """Process-lifetime byte store shared by every MemoryStorage.

    Writers are serialized by a single lock; concurrent writes to the same key
    leave one of the attempted values in place. ``max_bytes`` bounds the total
    size of all stored values, 0 means unbounded.
    """

    def __init__(self, max_bytes: int = 0):
        self.max_bytes = max(0, max_bytes)
        self._items: dict[str, bytes] = {}
        self._size = 0
        self._lock = threading.Lock()

    def put(self, key: str, payload: bytes) -> None:
        with self._lock:
            previous = self._items.get(key)
            new_size = self._size - len(previous or b"") + len(payload)
            if self.max_bytes and new_size > self.max_bytes:
                raise PersistenceError("memory store capacity exceeded")
            self._items[key] = bytes(payload)
            self._size = new_size

    def get(self, key: str = DEFAULT_KEY) -> bytes | None:
        with self._lock:
            return self._items.get(key)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._items)

    @property
    def size(self) -> int:
        with self._lock:
            return self._size

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._size = 0


class MemoryStorage(StoragePort):
    def __init__(self, store: MemoryStore, key: str = DEFAULT_KEY):
        self.store = store
        self.key = key

    def persist(self, payload: bytes) -> None:
        self.store.put(self.key, payload)
        logger.info("Data saved to memory key=%s (%d bytes)", self.key, len(payload))
