"""Error taxonomy for the save path.

Every error carries an ``outcome_status`` tag so callers classify failures by
type instead of by message text.
"""

from __future__ import annotations

from savedata.domain.models import OutcomeStatus


class SaveDataError(Exception):
    """Base exception for all savedata errors."""

    outcome_status: OutcomeStatus = "persistence_error"


class RequestValidationError(SaveDataError):
    """Raised when a save request fails structural or semantic checks."""

    outcome_status: OutcomeStatus = "validation_error"


class UnsupportedStorageKindError(RequestValidationError):
    """Raised when a request names a storage kind no backend is registered for."""

    outcome_status: OutcomeStatus = "unsupported_storage_kind"

    def __init__(self, kind: str):
        super().__init__(f"unsupported storage kind: {kind}")
        self.kind = kind


class PersistenceError(SaveDataError):
    """Raised by a storage backend when the payload could not be written."""

    outcome_status: OutcomeStatus = "persistence_error"


class DatabaseConnectionError(SaveDataError):
    """Raised when the process-wide database connection cannot be established."""
