"""
Shared environment-driven database configuration helpers.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_DATABASE_PATH = "./costa_cat_kpis.db"


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def to_sqlalchemy_url(location: str) -> str:
    """
    Turn a store location into a SQLAlchemy URL.

    Full URLs (``sqlite:///...``, ``postgresql://...``) pass through
    unchanged; anything else is treated as a SQLite file path.
    """

    location = location.strip()
    if "://" in location:
        return location
    return f"sqlite:///{location}"


def resolve_database_url() -> str:
    """
    Resolve the store URL from DATABASE_URL, falling back to the local
    SQLite file used by the dashboard.
    """

    load_env_files()

    direct_url = (os.getenv("DATABASE_URL") or "").strip()
    return to_sqlalchemy_url(direct_url or DEFAULT_DATABASE_PATH)
