from __future__ import annotations

import logging
from typing import Protocol

from savedata.application.validation import RequestValidator
from savedata.domain.errors import PersistenceError, RequestValidationError, UnsupportedStorageKindError
from savedata.domain.models import SaveOutcome, SaveRequest, StorageKind
from savedata.infra.ports.storage import StoragePort

logger = logging.getLogger(__name__)


class StorageFactoryPort(Protocol):
    @property
    def supported_kinds(self) -> frozenset[StorageKind]:
        ...

    def create_storage(self, kind: StorageKind) -> StoragePort:
        ...


class SaveService:
    def __init__(self, *, factory: StorageFactoryPort, validator: RequestValidator | None = None):
        self.factory = factory
        self.validator = validator or RequestValidator(factory.supported_kinds)

    def save_data(self, req: SaveRequest) -> SaveOutcome:
        try:
            kind = self.validator.validate(req)
        except RequestValidationError as exc:
            logger.info("Rejected save request: %s", exc)
            return SaveOutcome(status=exc.outcome_status, detail=str(exc))

        try:
            storage = self.factory.create_storage(kind)
        except UnsupportedStorageKindError as exc:
            logger.info("No storage backend for kind=%s", exc.kind)
            return SaveOutcome(status=exc.outcome_status, detail=str(exc), kind=kind)

        try:
            storage.persist(req.payload)
        except PersistenceError as exc:
            logger.error("Failed to save data to %s storage: %s", kind.value, exc)
            return SaveOutcome(status=exc.outcome_status, detail=str(exc), kind=kind)

        return SaveOutcome.ok(kind)
