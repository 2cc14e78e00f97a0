"""
app/mappers/column_normalizer.py

Maps spreadsheet column labels onto the canonical KPI field names.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Mapping, TypeVar

CANONICAL_FIELDS: tuple[str, ...] = (
    "fecha",
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

KNOWN_COLUMN_LABELS: dict[str, str] = {
    "Fecha": "fecha",
    "Facturación_Plazo": "facturacion_plazo",
    "Tiempo_Facturación": "tiempo_facturacion",
    "Integración_Sistemas": "integracion_sistemas",
    "Cierre_Contable": "cierre_contable",
    "Errores": "errores",
    "Reportes": "reportes",
    "Cobranza": "cobranza",
    "Control_Gastos": "control_gastos",
    "Inventarios": "inventarios",
}

_NON_IDENTIFIER = re.compile(r"[^a-z0-9]")

V = TypeVar("V")


def normalize_column_name(name: str) -> str:
    """
    Return the canonical field name for a column label.

    Known labels map through ``KNOWN_COLUMN_LABELS``; anything else is
    lowercased and every character outside ``[a-z0-9]`` becomes ``_``,
    so ``"Foo Bar!"`` turns into ``"foo_bar_"``.
    """

    # Spreadsheets may store accents decomposed (NFD).
    known = KNOWN_COLUMN_LABELS.get(unicodedata.normalize("NFC", name))
    if known is not None:
        return known
    return _NON_IDENTIFIER.sub("_", name.lower())


def normalize_row(row: Mapping[str, V]) -> dict[str, V]:
    """
    Re-key one parsed row with normalized column names.

    When two labels collapse onto the same name the later column wins.
    """

    return {normalize_column_name(key): value for key, value in row.items()}
