"""Maps storage kinds to backend builders.

Adding a backend means adding a ``StoragePort`` implementation and one
``register`` call; existing builders and the save service stay untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from savedata.domain.errors import UnsupportedStorageKindError
from savedata.domain.models import StorageKind
from savedata.infra.ports.storage import StoragePort
from savedata.infra.storage.database import ConnectionPort, DatabaseStorage
from savedata.infra.storage.local import FileStorage
from savedata.infra.storage.memory import MemoryStorage, MemoryStore

StorageBuilder = Callable[[], StoragePort]


class StorageFactory:
    def __init__(self):
        self._builders: dict[StorageKind, StorageBuilder] = {}

    def register(self, kind: StorageKind, builder: StorageBuilder) -> None:
        if kind in self._builders:
            raise ValueError(f"storage kind already registered: {kind.value}")
        self._builders[kind] = builder

    @property
    def supported_kinds(self) -> frozenset[StorageKind]:
        return frozenset(self._builders)

    def create_storage(self, kind: StorageKind | str) -> StoragePort:
        parsed = kind if isinstance(kind, StorageKind) else StorageKind.parse(kind)
        builder = self._builders.get(parsed) if parsed is not None else None
        if builder is None:
            raw = kind.value if isinstance(kind, StorageKind) else kind
            raise UnsupportedStorageKindError(raw)
        return builder()

    @classmethod
    def default(
        cls,
        *,
        file_path: Path,
        memory_store: MemoryStore,
        connection: ConnectionPort | None = None,
    ) -> StorageFactory:
        factory = cls()
        factory.register(StorageKind.FILE, lambda: FileStorage(file_path))
        factory.register(StorageKind.MEMORY, lambda: MemoryStorage(memory_store))
        if connection is not None:
            factory.register(StorageKind.DATABASE, lambda: DatabaseStorage(connection))
        return factory
