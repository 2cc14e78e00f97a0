from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import (
    ServerSettings,
    UploadSettings,
    get_server_settings,
    get_store_settings,
    get_upload_settings,
)
from app.schemas.health import HealthResponse
from app.services.kpi_ingestion_service import KpiIngestionService
from db.repositories.errors import FileStorageError
from db.repositories.storage import TempUploadStorage
from db.store import KpiStore

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _open_store(store: KpiStore) -> None:
    """
    Create tables on boot. A store that cannot be opened is logged, not
    fatal: the API still starts and reports it through /api/health.
    """

    try:
        store.create_all()
    except SQLAlchemyError:
        logger.exception("Error opening database at %s", store.url)
        return
    logger.info("Connected to database at %s", store.url)


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Prepare the upload spool and the store on boot; close the store on exit."""
    storage: TempUploadStorage = application.state.upload_storage
    store: KpiStore = application.state.store
    try:
        storage.ensure_root()
    except FileStorageError:
        logger.exception("Upload directory %s is not usable", storage.root_dir)
    _open_store(store)
    try:
        yield
    finally:
        store.dispose()
        logger.info("Database connection closed")


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    store: KpiStore | None = None,
    *,
    server_settings: ServerSettings | None = None,
    upload_settings: UploadSettings | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The store handle is owned by the returned application; pass one in to
    point the API at a different database.
    """

    server_settings = server_settings or get_server_settings()
    upload_settings = upload_settings or get_upload_settings()
    _configure_logging(server_settings.log_level)

    kpi_store = store or KpiStore(get_store_settings().database_url)
    upload_storage = TempUploadStorage(
        upload_settings.upload_dir,
        max_bytes=upload_settings.max_file_size,
    )

    application = FastAPI(
        title="KPI Dashboard API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    application.state.store = kpi_store
    application.state.upload_storage = upload_storage
    application.state.ingestion_service = KpiIngestionService(
        store=kpi_store,
        storage=upload_storage,
        batch_size=upload_settings.insert_batch_size,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[server_settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(StarletteHTTPException, _http_error_handler)

    from app.api.routers import kpi_router, upload_router

    application.include_router(kpi_router)
    application.include_router(upload_router)

    @application.get("/api/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(
            status="OK",
            timestamp=datetime.now(timezone.utc),
            database="connected" if kpi_store.ping() else "unavailable",
        )

    return application


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_server_settings()
    logger.info("KPI backend running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
