"""
app/validators package marker.
"""

from app.validators.kpi_row_validator import KpiRowValidator, coerce_fecha, coerce_metric

__all__ = [
    "KpiRowValidator",
    "coerce_fecha",
    "coerce_metric",
]
