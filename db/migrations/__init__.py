"""Versioned schema migrations for the memos store.

Each step is applied at most once, in ascending version order, and
recorded in the ``schema_version`` table.  ``run_migrations`` is called
once at startup; running it again is a no-op.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import Connection, Engine, func, insert, select
from sqlalchemy.exc import SQLAlchemyError

from core.memo.errors import StorageError
from db.migrations import v001_create_memos
from db.schema import schema_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    """A single schema step.

    Attributes:
        version: Strictly increasing integer identity.
        name: Short description stored alongside the version.
        apply: Callable that performs the DDL on an open transaction.
    """

    version: int
    name: str
    apply: Callable[[Connection], None]


MIGRATIONS: tuple[Migration, ...] = (
    Migration(1, "create_memos", v001_create_memos.run),
)

LATEST_VERSION: int = MIGRATIONS[-1].version


def current_version(conn: Connection) -> int:
    """Return the highest applied version, or 0 for a fresh database."""
    result = conn.execute(select(func.max(schema_version.c.version))).scalar()
    return int(result or 0)


def run_migrations(engine: Engine, now: int | None = None) -> int:
    """Bring the database up to ``LATEST_VERSION``.

    Args:
        engine: Engine bound to the target database.
        now: Unix seconds recorded as ``applied_at``. Defaults to the clock.

    Returns:
        The schema version after all pending steps ran.

    Raises:
        StorageError: If the database cannot be opened, a step fails, or the
            database was written by a newer schema than this code knows.
    """
    applied_at = int(time.time()) if now is None else now
    try:
        with engine.begin() as conn:
            schema_version.create(conn, checkfirst=True)
            version = current_version(conn)

        if version > LATEST_VERSION:
            raise StorageError(
                f"database schema version {version} is newer than supported {LATEST_VERSION}"
            )

        for migration in MIGRATIONS:
            if migration.version <= version:
                continue
            with engine.begin() as conn:
                migration.apply(conn)
                conn.execute(
                    insert(schema_version).values(
                        version=migration.version,
                        name=migration.name,
                        applied_at=applied_at,
                    )
                )
            logger.info("Applied migration %03d_%s", migration.version, migration.name)
            version = migration.version
    except SQLAlchemyError as exc:
        raise StorageError(f"schema migration failed: {exc}") from exc

    logger.debug("Schema at version %d", version)
    return version
