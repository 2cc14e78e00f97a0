"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import DEFAULT_DATABASE_PATH, load_env_files, to_sqlalchemy_url


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class ServerSettings:
    """
    HTTP server and cross-origin settings.
    """

    host: str = "0.0.0.0"
    port: int = 3001
    frontend_url: str = "http://localhost:5173"
    log_level: str = "INFO"


@dataclass(frozen=True)
class StoreSettings:
    """
    Location of the KPI database.
    """

    database_url: str = to_sqlalchemy_url(DEFAULT_DATABASE_PATH)


@dataclass(frozen=True)
class UploadSettings:
    """
    Runtime settings for file uploads and ingestion.
    """

    upload_dir: str = "uploads"
    max_file_size: int = 10 * 1024 * 1024
    insert_batch_size: int = 500


@lru_cache(maxsize=1)
def get_server_settings() -> ServerSettings:
    """
    Return cached server settings from environment variables.
    """

    return ServerSettings(
        host=_get_str_env("HOST", "0.0.0.0"),
        port=_get_int_env("PORT", 3001),
        frontend_url=_get_str_env("FRONTEND_URL", "http://localhost:5173"),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    """
    Return cached store settings; DATABASE_URL may be a plain file path.
    """

    return StoreSettings(
        database_url=to_sqlalchemy_url(_get_str_env("DATABASE_URL", DEFAULT_DATABASE_PATH)),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        upload_dir=_get_str_env("UPLOAD_DIR", "uploads"),
        max_file_size=max(1, _get_int_env("MAX_FILE_SIZE", 10 * 1024 * 1024)),
        insert_batch_size=max(1, _get_int_env("KPI_INSERT_BATCH_SIZE", 500)),
    )
