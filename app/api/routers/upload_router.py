"""
app/api/routers/upload_router.py

KPI file upload and upload-history endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, get_ingestion_service, get_kpi_upload, get_upload_storage
from app.domain.errors import IngestionError
from app.repositories.upload_history_repository import RECENT_UPLOADS_LIMIT, UploadHistoryRepository
from app.schemas.upload import UploadRecordResponse, UploadSummaryResponse
from app.services.kpi_ingestion_service import KpiIngestionService
from db.repositories.errors import FileStorageError, StoreError, UploadTooLargeError
from db.repositories.storage import TempUploadStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=UploadSummaryResponse)
def upload_kpi_file(
    file: UploadFile = Depends(get_kpi_upload),
    storage: TempUploadStorage = Depends(get_upload_storage),
    ingestion_service: KpiIngestionService = Depends(get_ingestion_service),
) -> UploadSummaryResponse:
    """
    Ingest one CSV / Excel file of KPI snapshots.
    """

    filename = file.filename or ""
    try:
        stored = storage.save(file_name=filename, stream=file.file)
    except UploadTooLargeError as exc:
        logger.warning("Rejected upload %r: %s", filename, exc)
        raise HTTPException(
            status_code=413,
            detail=str(exc),
        ) from exc
    except FileStorageError as exc:
        logger.exception("Could not spool upload %r", filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error processing file: {exc}",
        ) from exc
    finally:
        file.file.close()

    logger.info("Spooled upload %r (%d bytes)", filename, stored.size_bytes)

    try:
        summary = ingestion_service.ingest_file(
            temp_path=stored.path,
            filename=stored.original_name,
            extension=stored.extension,
        )
    except (IngestionError, StoreError) as exc:
        logger.error("Error processing file %r: %s", filename, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error processing file: {exc}",
        ) from exc

    return UploadSummaryResponse(
        records_processed=summary.records_processed,
        filename=summary.filename,
    )


@router.get("/uploads/history", response_model=list[UploadRecordResponse])
def get_upload_history(db: Session = Depends(get_db)) -> list[UploadRecordResponse]:
    """
    Return the most recent uploads, newest first.
    """

    try:
        records = UploadHistoryRepository(db).recent(RECENT_UPLOADS_LIMIT)
    except StoreError as exc:
        logger.exception("Error fetching upload history")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        ) from exc

    return [UploadRecordResponse.model_validate(record) for record in records]
