"""
db/models/kpi_snapshot.py

One row per ingested or recorded KPI observation.
"""

from __future__ import annotations

from sqlalchemy import Float, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin

KPI_METRIC_FIELDS: tuple[str, ...] = (
    "facturacion_plazo",
    "tiempo_facturacion",
    "integracion_sistemas",
    "cierre_contable",
    "errores",
    "reportes",
    "cobranza",
    "control_gastos",
    "inventarios",
)


class KpiSnapshot(Base, TimestampMixin):
    """
    Append-only KPI snapshot.

    ``fecha`` is the observation period as written in the source file and
    is deliberately not unique: re-uploading a file adds new rows.
    Metrics are NULL when the source cell was missing or non-numeric.
    """

    __tablename__ = "kpi_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fecha: Mapped[str] = mapped_column(Text, nullable=False)
    facturacion_plazo: Mapped[float | None] = mapped_column(Float, nullable=True)
    tiempo_facturacion: Mapped[float | None] = mapped_column(Float, nullable=True)
    integracion_sistemas: Mapped[float | None] = mapped_column(Float, nullable=True)
    cierre_contable: Mapped[float | None] = mapped_column(Float, nullable=True)
    errores: Mapped[float | None] = mapped_column(Float, nullable=True)
    reportes: Mapped[float | None] = mapped_column(Float, nullable=True)
    cobranza: Mapped[float | None] = mapped_column(Float, nullable=True)
    control_gastos: Mapped[float | None] = mapped_column(Float, nullable=True)
    inventarios: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (
        Index("ix_kpi_data_created_at", "created_at"),
    )
