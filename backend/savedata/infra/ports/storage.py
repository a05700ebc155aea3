from __future__ import annotations

from abc import ABC, abstractmethod


class StoragePort(ABC):
    @abstractmethod
    def persist(self, payload: bytes) -> None:
        """Write the payload in full or raise PersistenceError."""
