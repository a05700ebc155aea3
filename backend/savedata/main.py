from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from savedata.api.router import router as save_router
from savedata.api.schemas import HealthResponse
from savedata.application.services import SaveService
from savedata.application.validation import RequestValidator
from savedata.core.config import Settings, get_settings
from savedata.core.logging import configure_logging
from savedata.infra.db.connection import DatabaseConnection, database_url_from_settings
from savedata.infra.storage.factory import StorageFactory
from savedata.infra.storage.memory import MemoryStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Raising here aborts startup before uvicorn binds its listener.
        connection = DatabaseConnection(database_url_from_settings(settings))
        connection.connect()

        memory_store = MemoryStore(max_bytes=settings.memory_max_bytes)
        factory = StorageFactory.default(
            file_path=settings.file_storage_path,
            memory_store=memory_store,
            connection=connection,
        )
        app.state.connection = connection
        app.state.memory_store = memory_store
        app.state.save_service = SaveService(
            factory=factory,
            validator=RequestValidator(factory.supported_kinds),
        )
        logger.info("%s ready on port %d", settings.app_name, settings.port)
        try:
            yield
        finally:
            logger.info("Shutting down %s...", settings.app_name)
            connection.close()

    app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(save_router)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health() -> HealthResponse:
        return HealthResponse()

    return app


app = create_app()
