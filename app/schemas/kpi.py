"""
app/schemas/kpi.py

Response schemas for KPI read endpoints.

Field names follow the stored column names because the dashboard
frontend reads them verbatim.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class KpiValuesResponse(BaseModel):
    """
    The nine KPI metrics; also the shape of the built-in default snapshot.
    """

    facturacion_plazo: float | None = None
    tiempo_facturacion: float | None = None
    integracion_sistemas: float | None = None
    cierre_contable: float | None = None
    errores: float | None = None
    reportes: float | None = None
    cobranza: float | None = None
    control_gastos: float | None = None
    inventarios: float | None = None


class KpiSnapshotResponse(KpiValuesResponse):
    """
    One stored KPI snapshot.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    fecha: str
    created_at: datetime
    updated_at: datetime
