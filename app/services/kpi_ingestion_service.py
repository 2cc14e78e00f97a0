"""
app/services/kpi_ingestion_service.py

Service layer for KPI file ingestion.

One upload runs the pipeline:

    1. KpiFileParser.parse()  : decode rows, keep date-bearing ones
    2. normalize_row()  : map column labels to canonical names
    3. KpiRowValidator  : coerce metrics, default the date
    4. KpiSnapshotRepository  : append every snapshot
    5. UploadHistoryRepository  : record provenance for the batch

Steps 4 and 5 share one transaction: a failed insert leaves neither
snapshots nor an upload record behind. The temporary upload file is
deleted on every exit path.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from app.domain.kpi_snapshot import KpiSnapshotInput, RawRow, UploadSummary
from app.mappers.column_normalizer import CANONICAL_FIELDS, normalize_row
from app.parsers.kpi_file_parser import KpiFileParser
from app.repositories.kpi_snapshot_repository import KpiSnapshotRepository
from app.repositories.upload_history_repository import UploadHistoryRepository
from app.validators.kpi_row_validator import KpiRowValidator
from db.repositories.errors import FileStorageError, StoreError
from db.repositories.storage import TempUploadStorage
from db.store import KpiStore

logger = logging.getLogger(__name__)


class KpiIngestionService:
    """
    Coordinates parsing, normalization, coercion, and persistence of one upload.
    """

    def __init__(
        self,
        *,
        store: KpiStore,
        storage: TempUploadStorage,
        batch_size: int = 500,
        parser: KpiFileParser | None = None,
        validator: KpiRowValidator | None = None,
    ) -> None:
        self._store = store
        self._storage = storage
        self._batch_size = max(1, batch_size)
        self._parser = parser or KpiFileParser()
        self._validator = validator or KpiRowValidator()

    def ingest_file(
        self,
        *,
        temp_path: str | Path,
        filename: str,
        extension: str,
        today: date | None = None,
    ) -> UploadSummary:
        """
        Ingest one spooled upload and return the number of stored snapshots.

        Args:
            temp_path:  Spooled upload; removed before this method returns.
            filename:   Client-supplied original name, stored for display.
            extension:  Lowercase extension tag (``csv``, ``xlsx``, ``xls``).
            today:      Date used for rows without a usable ``fecha``.

        Raises:
            UnsupportedFormatError, FileParseError, EmptyResultError: parse failures.
            StoreError: the batch could not be persisted; nothing was committed.
        """
        logger.info("Processing file: %s", filename)
        try:
            raw_rows = self._parser.parse(temp_path, extension)
            snapshots = self.build_snapshots(raw_rows, today=today)
            summary = self._persist(filename=filename, snapshots=snapshots)
        finally:
            self._discard_temp_file(temp_path)

        logger.info(
            "Ingested file=%r records=%d upload_id=%s",
            filename,
            summary.records_processed,
            summary.upload_id,
        )
        return summary

    def build_snapshots(
        self,
        raw_rows: list[RawRow],
        *,
        today: date | None = None,
    ) -> list[KpiSnapshotInput]:
        """
        Normalize and coerce parsed rows without touching the store.
        """

        ingestion_day = today or date.today()
        snapshots: list[KpiSnapshotInput] = []
        ignored_columns: set[str] = set()
        for raw_row in raw_rows:
            normalized = normalize_row(raw_row)
            ignored_columns.update(key for key in normalized if key not in CANONICAL_FIELDS)
            snapshots.append(self._validator.to_snapshot_input(normalized, today=ingestion_day))

        if ignored_columns:
            logger.debug("Ignoring non-KPI columns: %s", ", ".join(sorted(ignored_columns)))
        return snapshots

    def _persist(self, *, filename: str, snapshots: list[KpiSnapshotInput]) -> UploadSummary:
        with self._store.session() as db:
            try:
                inserted = KpiSnapshotRepository(db).bulk_insert(
                    snapshots,
                    batch_size=self._batch_size,
                )
                record = UploadHistoryRepository(db).record_upload(
                    filename=filename,
                    records_count=inserted,
                )
                upload_id = record.id
                db.commit()
            except StoreError:
                db.rollback()
                logger.error("Rolled back ingestion of %r", filename)
                raise
            except SQLAlchemyError as exc:
                db.rollback()
                raise StoreError("Failed to commit ingestion batch.") from exc

        return UploadSummary(filename=filename, records_processed=inserted, upload_id=upload_id)

    def _discard_temp_file(self, temp_path: str | Path) -> None:
        try:
            self._storage.delete(temp_path)
        except FileStorageError:
            logger.warning("Could not delete temporary upload %s", temp_path, exc_info=True)
