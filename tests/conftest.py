from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.config import ServerSettings, UploadSettings
from app.main import create_app
from app.services.kpi_ingestion_service import KpiIngestionService
from db.models.kpi_snapshot import KpiSnapshot
from db.repositories.storage import TempUploadStorage
from db.store import KpiStore

KPI_HEADER = (
    "Fecha,Facturación_Plazo,Tiempo_Facturación,Integración_Sistemas,"
    "Cierre_Contable,Errores,Reportes,Cobranza,Control_Gastos,Inventarios"
)


def write_csv(path: Path, lines: list[str], *, header: str = KPI_HEADER) -> Path:
    path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
    return path


def add_snapshot(store: KpiStore, *, fecha: str, created_at: datetime, **metrics: float) -> None:
    with store.session() as db:
        db.add(KpiSnapshot(fecha=fecha, created_at=created_at, updated_at=created_at, **metrics))
        db.commit()


@pytest.fixture()
def kpi_csv() -> Callable[..., Path]:
    return write_csv


@pytest.fixture()
def snapshot_factory() -> Callable[..., None]:
    return add_snapshot


@pytest.fixture()
def store(tmp_path: Path) -> Iterator[KpiStore]:
    """File-backed SQLite store with tables created."""
    kpi_store = KpiStore(f"sqlite:///{tmp_path / 'kpis.db'}")
    kpi_store.create_all()
    yield kpi_store
    kpi_store.dispose()


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "uploads"
    directory.mkdir()
    return directory


@pytest.fixture()
def storage(upload_dir: Path) -> TempUploadStorage:
    return TempUploadStorage(upload_dir, max_bytes=1024 * 1024)


@pytest.fixture()
def ingestion_service(store: KpiStore, storage: TempUploadStorage) -> KpiIngestionService:
    return KpiIngestionService(store=store, storage=storage, batch_size=2)


@pytest.fixture()
def api_app(store: KpiStore, upload_dir: Path) -> FastAPI:
    return create_app(
        store,
        server_settings=ServerSettings(),
        upload_settings=UploadSettings(upload_dir=str(upload_dir), max_file_size=16 * 1024),
    )


@pytest.fixture()
def client(api_app: FastAPI) -> Iterator[TestClient]:
    with TestClient(api_app) as test_client:
        yield test_client
