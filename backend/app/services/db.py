"""
Database configuration and session management for the offset backend.

This module defines a SQLModel engine for the polyline registry.  The
database URL is read from the ``POLYOFFSET_DB_URL`` environment
variable; when unset a SQLite database stored in the project's
``storage`` directory is used.  It exposes helper functions to
initialise the schema and to obtain session objects for interacting
with the database.
"""

from __future__ import annotations

import os
from pathlib import Path
from sqlmodel import SQLModel, create_engine, Session

# Determine the base directory for storage.  We walk up two parent
# directories from this file to locate the backend root, then append
# ``storage``.
STORAGE_DIR = Path(__file__).resolve().parents[2] / "storage"


def _database_url() -> str:
    url = os.getenv("POLYOFFSET_DB_URL")
    if url:
        return url
    STORAGE_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(STORAGE_DIR / 'polyoffset.db').as_posix()}"


engine = create_engine(_database_url(), echo=False)


def create_db_and_tables() -> None:
    """Create all tables in the database.

    This should be called once on application startup.  If the
    database file does not exist it will be created automatically.
    """
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    """Return a new SQLModel session bound to the engine.

    Sessions returned by this function should be managed with a
    context manager (``with get_session() as session: ...``) to
    ensure that connections are properly closed.
    """
    return Session(engine)
