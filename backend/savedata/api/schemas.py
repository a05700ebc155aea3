from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel, field_validator

from savedata.domain.models import SaveRequest


class SaveDataRequest(BaseModel):
    data: bytes = b""
    storage_type: str = ""

    @field_validator("data", mode="before")
    @classmethod
    def _decode_base64(cls, value: Any) -> bytes:
        if value is None:
            return b""
        if not isinstance(value, str):
            raise ValueError("data must be a base64 encoded string")
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("data is not valid base64") from exc

    @field_validator("storage_type", mode="before")
    @classmethod
    def _null_storage_type(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_domain(self) -> SaveRequest:
        return SaveRequest(payload=self.data, storage_kind=self.storage_type)


class SaveDataResponse(BaseModel):
    message: str = "Data saved successfully"
    status: str = "success"


class HealthResponse(BaseModel):
    status: str = "healthy"
