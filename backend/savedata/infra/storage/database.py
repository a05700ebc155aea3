from __future__ import annotations

import logging
from typing import Protocol

from savedata.domain.errors import PersistenceError
from savedata.infra.ports.storage import StoragePort

logger = logging.getLogger(__name__)


class ConnectionPort(Protocol):
    def is_connected(self) -> bool:
        ...

    def save(self, payload: bytes) -> None:
        ...


class DatabaseStorage(StoragePort):
    """Hands payloads to the shared connection. Never opens or closes it."""

    def __init__(self, connection: ConnectionPort):
        self.connection = connection

    def persist(self, payload: bytes) -> None:
        if not self.connection.is_connected():
            raise PersistenceError("connection not established")
        self.connection.save(payload)
        logger.info("Data saved to database (%d bytes)", len(payload))
