from __future__ import annotations

from collections.abc import Iterable

from savedata.domain.errors import RequestValidationError, UnsupportedStorageKindError
from savedata.domain.models import SaveRequest, StorageKind


class RequestValidator:
    def __init__(self, supported_kinds: Iterable[StorageKind] = tuple(StorageKind)):
        self.supported_kinds = frozenset(supported_kinds)

    def validate(self, req: SaveRequest) -> StorageKind:
        """Return the requested kind, or raise on the first rule the request breaks."""
        if not req.payload:
            raise RequestValidationError("payload empty")
        if not req.storage_kind:
            raise RequestValidationError("storage kind empty")

        kind = StorageKind.parse(req.storage_kind)
        if kind is None or kind not in self.supported_kinds:
            raise UnsupportedStorageKindError(req.storage_kind)
        return kind
