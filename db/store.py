"""
db/store.py

Owned store handle: one SQLAlchemy engine plus its session factory.

The application creates a single ``KpiStore`` at startup and hands it to the
API layer and the ingestion service; nothing in the codebase reaches for a
module-level engine.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db.base import Base
from db.config import resolve_database_url

logger = logging.getLogger(__name__)


def _get_bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def create_store_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are shared with FastAPI's worker threads, so the
    same-thread check is disabled for that dialect.
    """

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        echo=_get_bool_env("SQL_ECHO", default=False),
        pool_pre_ping=True,
        connect_args=connect_args,
    )


class KpiStore:
    """
    Long-lived handle over the KPI database.
    """

    def __init__(self, url: str | None = None) -> None:
        self._url = url or resolve_database_url()
        self._engine = create_store_engine(self._url)
        self._session_factory = sessionmaker(
            bind=self._engine,
            class_=Session,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @property
    def url(self) -> str:
        return self._url

    def create_all(self) -> None:
        """Create the snapshot and upload-history tables when missing."""

        import db.models  # noqa: F401

        Base.metadata.create_all(self._engine)
        logger.info("KPI tables ready at %s", self._engine.url.render_as_string(hide_password=True))

    def ping(self) -> bool:
        """Return True when a trivial query succeeds."""

        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Yield a session and guarantee it is closed."""

        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self._engine.dispose()
