"""
SQLAlchemy engine factory for the memos store.

There is no module-level engine: bootstrap calls
``create_storage_engine`` once with the configured file path and hands the
result to ``MemoStore``.
"""

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, event

logger = logging.getLogger(__name__)


def sqlite_url(db_file: str) -> str:
    """Return the SQLAlchemy URL for a SQLite file path (``:memory:`` allowed)."""
    return f"sqlite+pysqlite:///{db_file}"


def create_storage_engine(db_file: str) -> Engine:
    """Build an engine for the SQLite file at *db_file*.

    The parent directory is created if missing.  The connection may be
    shared across the server's worker threads; SQLite's own locking
    serializes writers.
    """
    if db_file != ":memory:":
        Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        sqlite_url(db_file),
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_conn, _record) -> None:  # type: ignore[no-untyped-def]
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    logger.debug("Storage engine created for %s", db_file)
    return engine
