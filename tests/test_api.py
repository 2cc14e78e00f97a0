"""
tests/test_api.py

HTTP contract tests for the KPI dashboard API.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import pandas as pd
from fastapi.testclient import TestClient

from db.store import KpiStore

CSV_BODY = (
    "Fecha,Facturación_Plazo,Tiempo_Facturación,Integración_Sistemas,"
    "Cierre_Contable,Errores,Reportes,Cobranza,Control_Gastos,Inventarios\n"
    "2024-01-31,98,4,80,75,2,90,85,70,99\n"
    "2024-02-29,97,5,81,76,3,91,86,71,98\n"
    ",1,1,1,1,1,1,1,1,1\n"
)

BASE_TIME = datetime(2024, 1, 1, 8, 0, 0)
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _upload(client: TestClient, filename: str, body: bytes, content_type: str = "text/csv"):
    return client.post("/api/upload", files={"file": (filename, body, content_type)})


# ---------------------------------------------------------------------------
# GET /api/kpis/latest
# ---------------------------------------------------------------------------


def test_latest_returns_defaults_when_store_is_empty(client: TestClient) -> None:
    response = client.get("/api/kpis/latest")

    assert response.status_code == 200
    assert response.json() == {
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


def test_latest_returns_newest_snapshot(
    client: TestClient, store: KpiStore, snapshot_factory: Callable[..., None]
) -> None:
    snapshot_factory(store, fecha="2024-01-31", created_at=BASE_TIME, errores=1.0)
    snapshot_factory(store, fecha="2024-02-29", created_at=BASE_TIME + timedelta(days=1), errores=2.0)

    body = client.get("/api/kpis/latest").json()

    assert body["fecha"] == "2024-02-29"
    assert body["errores"] == 2.0
    assert body["cobranza"] is None
    assert {"id", "created_at", "updated_at"} <= set(body)


# ---------------------------------------------------------------------------
# GET /api/kpis/history
# ---------------------------------------------------------------------------


def test_history_returns_newest_rows_oldest_first(
    client: TestClient, store: KpiStore, snapshot_factory: Callable[..., None]
) -> None:
    for offset, fecha in enumerate(("2024-01-31", "2024-02-29", "2024-03-31")):
        snapshot_factory(store, fecha=fecha, created_at=BASE_TIME + timedelta(days=offset))

    response = client.get("/api/kpis/history", params={"limit": 2})

    assert response.status_code == 200
    assert [row["fecha"] for row in response.json()] == ["2024-02-29", "2024-03-31"]


def test_history_defaults_to_fifteen_rows(
    client: TestClient, store: KpiStore, snapshot_factory: Callable[..., None]
) -> None:
    for offset in range(20):
        snapshot_factory(store, fecha=f"dia-{offset:02d}", created_at=BASE_TIME + timedelta(hours=offset))

    rows = client.get("/api/kpis/history").json()

    assert len(rows) == 15
    assert rows[0]["fecha"] == "dia-05"
    assert rows[-1]["fecha"] == "dia-19"


def test_history_rejects_non_positive_limit(client: TestClient) -> None:
    assert client.get("/api/kpis/history", params={"limit": 0}).status_code == 422


# ---------------------------------------------------------------------------
# POST /api/upload
# ---------------------------------------------------------------------------


def test_upload_csv(client: TestClient, upload_dir: Path) -> None:
    response = _upload(client, "febrero.csv", CSV_BODY.encode("utf-8"))

    assert response.status_code == 200
    assert response.json() == {
        "message": "File processed successfully",
        "recordsProcessed": 2,
        "filename": "febrero.csv",
    }
    assert list(upload_dir.iterdir()) == []

    latest = client.get("/api/kpis/latest").json()
    assert latest["fecha"] == "2024-02-29"


def test_upload_xlsx_workbook(client: TestClient, upload_dir: Path) -> None:
    buffer = io.BytesIO()
    pd.DataFrame(
        {
            "Fecha": [pd.Timestamp("2024-01-31"), pd.Timestamp("2024-02-29"), None],
            "Facturación_Plazo": [98, 97, 50],
            "Errores": [2, "n/a", 1],
        }
    ).to_excel(buffer, index=False, engine="openpyxl")

    response = _upload(client, "kpis.xlsx", buffer.getvalue(), XLSX_CONTENT_TYPE)

    assert response.status_code == 200
    assert response.json()["recordsProcessed"] == 2
    assert list(upload_dir.iterdir()) == []

    latest = client.get("/api/kpis/latest").json()
    assert latest["fecha"] == "2024-02-29"
    assert latest["facturacion_plazo"] == 97.0
    assert latest["errores"] is None

    uploads = client.get("/api/uploads/history").json()
    assert [(row["filename"], row["records_count"]) for row in uploads] == [("kpis.xlsx", 2)]


def test_upload_without_file_is_400(client: TestClient) -> None:
    response = client.post("/api/upload")

    assert response.status_code == 400
    assert response.json() == {"error": "No file uploaded"}


def test_upload_unsupported_extension_is_500(client: TestClient, upload_dir: Path) -> None:
    response = _upload(client, "notes.txt", b"Fecha\n2024-01-31\n", "text/plain")

    assert response.status_code == 500
    assert response.json() == {"error": "Error processing file: Unsupported file format"}
    assert list(upload_dir.iterdir()) == []


def test_upload_without_dated_rows_is_500(client: TestClient) -> None:
    response = _upload(client, "vacio.csv", b"Fecha,Errores\n,3\n")

    assert response.status_code == 500
    assert response.json() == {"error": "Error processing file: No valid data found in file"}


def test_upload_over_size_limit_is_413(client: TestClient, upload_dir: Path) -> None:
    oversized = CSV_BODY.encode("utf-8") * 100

    response = _upload(client, "grande.csv", oversized)

    assert response.status_code == 413
    assert "error" in response.json()
    assert list(upload_dir.iterdir()) == []


# ---------------------------------------------------------------------------
# GET /api/uploads/history
# ---------------------------------------------------------------------------


def test_upload_history_lists_newest_first(client: TestClient) -> None:
    for name in ("uno.csv", "dos.csv"):
        assert _upload(client, name, CSV_BODY.encode("utf-8")).status_code == 200

    rows = client.get("/api/uploads/history").json()

    assert [row["filename"] for row in rows] == ["dos.csv", "uno.csv"]
    assert all(row["records_count"] == 2 and row["status"] == "success" for row in rows)


def test_upload_history_is_capped_at_ten(client: TestClient) -> None:
    for index in range(12):
        _upload(client, f"carga-{index}.csv", CSV_BODY.encode("utf-8"))

    rows = client.get("/api/uploads/history").json()

    assert len(rows) == 10
    assert rows[0]["filename"] == "carga-11.csv"


# ---------------------------------------------------------------------------
# GET /api/health
# ---------------------------------------------------------------------------


def test_health(client: TestClient) -> None:
    body = client.get("/api/health").json()

    assert body["status"] == "OK"
    assert body["database"] == "connected"
    assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


def test_unknown_route_uses_error_body(client: TestClient) -> None:
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
