from __future__ import annotations

from fastapi import Request

from savedata.application.services import SaveService


async def provide_save_service(request: Request) -> SaveService:
    return request.app.state.save_service
