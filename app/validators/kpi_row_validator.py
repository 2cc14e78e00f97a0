"""
app/validators/kpi_row_validator.py

Type coercion for normalized KPI rows.

No row is rejected here: unusable metric cells become None and a missing
date falls back to the ingestion day.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Mapping

from app.domain.kpi_snapshot import KpiSnapshotInput, RawCell
from db.models.kpi_snapshot import KPI_METRIC_FIELDS

# Leading decimal literal, as in "85%" or "12.5 dias".
_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_metric(value: RawCell) -> float | None:
    """
    Parse one metric cell into a float, or None when it carries no number.
    """

    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMERIC_PREFIX.match(value.strip())
        if match is None:
            return None
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_fecha(value: RawCell, *, today: date) -> str:
    if value is None:
        return today.isoformat()
    if isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value).strip()
    return text or today.isoformat()


class KpiRowValidator:
    """
    Converts normalized rows into ``KpiSnapshotInput`` objects.
    """

    def to_snapshot_input(
        self,
        normalized_row: Mapping[str, RawCell],
        *,
        today: date | None = None,
    ) -> KpiSnapshotInput:
        """Coerce the nine metrics and default a missing ``fecha`` to ``today``."""
        metrics = {
            field: coerce_metric(normalized_row.get(field))
            for field in KPI_METRIC_FIELDS
        }
        return KpiSnapshotInput(
            fecha=coerce_fecha(normalized_row.get("fecha"), today=today or date.today()),
            **metrics,
        )
