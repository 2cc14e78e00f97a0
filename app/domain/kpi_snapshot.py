"""
app/domain/kpi_snapshot.py

Domain models used by the KPI ingestion flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# One parsed spreadsheet cell: text, number, or empty.
RawCell = Union[str, float, None]
RawRow = dict[str, RawCell]

# Served by GET /api/kpis/latest while the store holds no snapshot.
DEFAULT_KPI_VALUES: dict[str, float] = {
    "facturacion_plazo": 100,
    "tiempo_facturacion": 100,
    "integracion_sistemas": 80,
    "cierre_contable": 80,
    "errores": 80,
    "reportes": 80,
    "cobranza": 80,
    "control_gastos": 80,
    "inventarios": 100,
}


@dataclass(frozen=True)
class KpiSnapshotInput:
    """
    Typed canonical snapshot prepared for persistence.
    """

    fecha: str
    facturacion_plazo: float | None = None
    tiempo_facturacion: float | None = None
    integracion_sistemas: float | None = None
    cierre_contable: float | None = None
    errores: float | None = None
    reportes: float | None = None
    cobranza: float | None = None
    control_gastos: float | None = None
    inventarios: float | None = None


@dataclass(frozen=True)
class UploadSummary:
    """
    End-of-run ingestion summary.
    """

    filename: str
    records_processed: int
    upload_id: int | None = None
