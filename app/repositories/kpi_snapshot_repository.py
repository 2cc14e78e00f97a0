"""
app/repositories/kpi_snapshot_repository.py

Persistence layer for KPI snapshots.

The caller controls commit/rollback; this repository never commits.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.kpi_snapshot import KpiSnapshotInput
from db.models.kpi_snapshot import KpiSnapshot
from db.repositories.errors import StoreError

_DEFAULT_BATCH_SIZE = 500


class KpiSnapshotRepository:
    """
    Repository for appending and reading KpiSnapshot rows.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def bulk_insert(
        self,
        rows: Sequence[KpiSnapshotInput],
        *,
        batch_size: int = _DEFAULT_BATCH_SIZE,
    ) -> int:
        """
        Insert snapshots in chunks and return the exact number of new rows.
        """

        if not rows:
            return 0

        payloads: list[dict[str, Any]] = [asdict(row) for row in rows]
        size = max(1, batch_size)
        inserted = 0
        try:
            for start in range(0, len(payloads), size):
                chunk = payloads[start : start + size]
                stmt = insert(KpiSnapshot).values(chunk).returning(KpiSnapshot.id)
                inserted += len(self._session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise StoreError("Failed to insert KPI snapshots.") from exc
        return inserted

    def latest(self) -> KpiSnapshot | None:
        stmt = (
            select(KpiSnapshot)
            .order_by(KpiSnapshot.created_at.desc(), KpiSnapshot.id.desc())
            .limit(1)
        )
        try:
            return self._session.scalars(stmt).first()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to fetch latest KPI snapshot.") from exc

    def history(self, limit: int) -> list[KpiSnapshot]:
        """
        Return the ``limit`` newest snapshots, oldest first.
        """

        stmt = (
            select(KpiSnapshot)
            .order_by(KpiSnapshot.created_at.desc(), KpiSnapshot.id.desc())
            .limit(max(0, limit))
        )
        try:
            newest_first = list(self._session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise StoreError("Failed to fetch KPI history.") from exc
        newest_first.reverse()
        return newest_first
