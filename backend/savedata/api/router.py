from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from savedata.api.dependencies import provide_save_service
from savedata.api.schemas import SaveDataRequest, SaveDataResponse
from savedata.application.services import SaveService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["save"])

_ERROR_STATUS_CODES = {
    "validation_error": 400,
    "unsupported_storage_kind": 400,
    "persistence_error": 500,
}


@router.post("/save-data", response_model=SaveDataResponse)
async def save_data(request: Request, service: SaveService = Depends(provide_save_service)):
    try:
        body = await request.body()
    except ClientDisconnect as exc:
        raise HTTPException(status_code=400, detail="Failed to read body") from exc

    try:
        payload = SaveDataRequest.model_validate_json(body)
    except ValidationError as exc:
        logger.debug("Rejected malformed save-data body: %s", exc)
        raise HTTPException(status_code=400, detail="Invalid JSON format") from exc

    outcome = await run_in_threadpool(service.save_data, payload.to_domain())
    if not outcome.is_success:
        raise HTTPException(status_code=_ERROR_STATUS_CODES[outcome.status], detail=outcome.detail)

    return SaveDataResponse()
