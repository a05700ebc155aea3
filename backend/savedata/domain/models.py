from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

OutcomeStatus = Literal["success", "validation_error", "unsupported_storage_kind", "persistence_error"]


class StorageKind(str, Enum):
    FILE = "file"
    DATABASE = "database"
    MEMORY = "memory"

    @classmethod
    def parse(cls, raw: str | None) -> StorageKind | None:
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(frozen=True)
class SaveRequest:
    payload: bytes
    storage_kind: str


@dataclass(frozen=True)
class SaveOutcome:
    status: OutcomeStatus
    detail: str | None = None
    kind: StorageKind | None = None

    @classmethod
    def ok(cls, kind: StorageKind) -> SaveOutcome:
        return cls(status="success", kind=kind)

    @property
    def is_success(self) -> bool:
        return self.status == "success"
