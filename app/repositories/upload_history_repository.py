"""
app/repositories/upload_history_repository.py

Persistence layer for upload provenance records.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models.upload_record import UploadRecord, UploadStatus
from db.repositories.errors import StoreError

RECENT_UPLOADS_LIMIT = 10


class UploadHistoryRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def record_upload(
        self,
        *,
        filename: str,
        records_count: int,
        status: str = UploadStatus.SUCCESS,
    ) -> UploadRecord:
        record = UploadRecord(filename=filename, records_count=records_count, status=status)
        try:
            self._session.add(record)
            self._session.flush()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to record upload history.") from exc
        return record

    def recent(self, limit: int = RECENT_UPLOADS_LIMIT) -> list[UploadRecord]:
        """
        Return the newest upload records first.
        """

        stmt = (
            select(UploadRecord)
            .order_by(UploadRecord.upload_date.desc(), UploadRecord.id.desc())
            .limit(max(0, limit))
        )
        try:
            return list(self._session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise StoreError("Failed to fetch upload history.") from exc
