"""
app/api/routers/kpi_router.py

KPI read endpoints for the dashboard.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.domain.kpi_snapshot import DEFAULT_KPI_VALUES
from app.repositories.kpi_snapshot_repository import KpiSnapshotRepository
from app.schemas.kpi import KpiSnapshotResponse
from db.repositories.errors import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/kpis", tags=["kpi"])

DEFAULT_HISTORY_LIMIT = 15


@router.get("/latest", response_model=None)
def get_latest_kpis(db: Session = Depends(get_db)) -> KpiSnapshotResponse | dict[str, Any]:
    """
    Return the newest snapshot, or the built-in defaults while none exists.
    """

    try:
        snapshot = KpiSnapshotRepository(db).latest()
    except StoreError as exc:
        logger.exception("Error fetching latest KPIs")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        ) from exc

    if snapshot is None:
        return dict(DEFAULT_KPI_VALUES)
    return KpiSnapshotResponse.model_validate(snapshot)


@router.get("/history", response_model=list[KpiSnapshotResponse])
def get_kpi_history(
    limit: int = Query(default=DEFAULT_HISTORY_LIMIT, ge=1, description="Number of newest snapshots to return"),
    db: Session = Depends(get_db),
) -> list[KpiSnapshotResponse]:
    """
    Return up to ``limit`` newest snapshots in chronological order.
    """

    try:
        snapshots = KpiSnapshotRepository(db).history(limit)
    except StoreError as exc:
        logger.exception("Error fetching KPI history")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        ) from exc

    return [KpiSnapshotResponse.model_validate(snapshot) for snapshot in snapshots]
