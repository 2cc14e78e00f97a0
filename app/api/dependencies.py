"""
app/api/dependencies.py

Shared FastAPI dependencies: store sessions, services, and upload checks.
"""

from __future__ import annotations

from collections.abc import Generator

from fastapi import File, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

from app.services.kpi_ingestion_service import KpiIngestionService
from db.repositories.storage import TempUploadStorage
from db.store import KpiStore


def get_store(request: Request) -> KpiStore:
    return request.app.state.store


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Yield a session from the application's store and guarantee cleanup.
    """

    with get_store(request).session() as db:
        yield db


def get_upload_storage(request: Request) -> TempUploadStorage:
    return request.app.state.upload_storage


def get_ingestion_service(request: Request) -> KpiIngestionService:
    return request.app.state.ingestion_service


def get_kpi_upload(file: UploadFile | None = File(default=None)) -> UploadFile:
    """
    Require the multipart ``file`` field.
    """

    if file is None or not (file.filename or "").strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )
    return file
