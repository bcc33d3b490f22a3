"""SQLite-backed query layer for memos.

Each public method issues exactly one statement against the ``memos``
table and returns plain ``Memo`` value objects; nothing is cached
between calls.  Every SQLAlchemy failure is re-raised as
``StorageError`` with the original chained.

Note the deliberate asymmetry: ``list_active`` hides archived memos,
``list_by_tag`` does not.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import Engine, RowMapping, false, insert, select
from sqlalchemy.exc import SQLAlchemyError

from core.config import Settings
from core.memo.errors import NotFound, StorageError
from core.memo.types import Memo
from db.migrations import run_migrations
from db.schema import memos
from db.session import create_storage_engine
from infrastructure.metrics import record_storage_error

logger = logging.getLogger(__name__)


def _row_to_memo(row: RowMapping) -> Memo:
    """Convert a result row mapping to a Memo."""
    return Memo(
        id=row["id"],
        tag=row["tag"] or "",
        title=row["title"] or "",
        content=row["content"] or "",
        created_at=row["created_at"] or 0,
        updated_at=row["updated_at"] or 0,
        archived=bool(row["archived"]),
        hero=bytes(row["hero"] or b""),
    )


def _storage_error(operation: str, exc: SQLAlchemyError) -> StorageError:
    record_storage_error(operation)
    return StorageError(f"{operation} failed: {exc}")


class MemoStore:
    """Storage client for memo records.

    Constructed once by the process bootstrap and passed explicitly to
    the web application.  Safe to share between request threads.

    Args:
        engine: Engine bound to a database already migrated to the
            current schema.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> MemoStore:
        """Open the configured database and migrate it.

        Raises:
            StorageError: If the file cannot be opened or migrated.
        """
        try:
            engine = create_storage_engine(settings.db_file)
        except (OSError, SQLAlchemyError) as exc:
            raise StorageError(f"cannot open {settings.db_file!r}: {exc}") from exc
        run_migrations(engine)
        return cls(engine)

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    def list_active(self) -> list[Memo]:
        """Return all memos that are not archived, in storage order.

        Raises:
            StorageError: On any database failure.
        """
        stmt = select(memos).where(memos.c.archived == false()).order_by(memos.c.id)
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            raise _storage_error("list_active", exc) from exc
        return [_row_to_memo(r) for r in rows]

    def list_by_tag(self, tag: str) -> list[Memo]:
        """Return every memo whose tag equals *tag* exactly, archived or not.

        Args:
            tag: Compared byte-for-byte; no case folding or trimming.

        Raises:
            StorageError: On any database failure.
        """
        stmt = select(memos).where(memos.c.tag == tag).order_by(memos.c.id)
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            raise _storage_error("list_by_tag", exc) from exc
        return [_row_to_memo(r) for r in rows]

    def get_by_id(self, memo_id: int) -> Memo:
        """Fetch a single memo.

        Raises:
            NotFound: If no memo has this id.
            StorageError: On any database failure.
        """
        stmt = select(memos).where(memos.c.id == memo_id)
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).mappings().first()
        except SQLAlchemyError as exc:
            raise _storage_error("get_by_id", exc) from exc
        if row is None:
            raise NotFound(memo_id)
        return _row_to_memo(row)

    def create(
        self,
        tag: str,
        title: str,
        content: str,
        *,
        now: datetime | None = None,
    ) -> Memo:
        """Insert a new memo and return it with its assigned id.

        Hero starts empty and archived starts false; both timestamps are
        set to *now*.

        Args:
            tag: Filter tag.
            title: Headline.
            content: Body text.
            now: Insert time. Defaults to the current UTC time.

        Raises:
            StorageError: On any database failure.
        """
        stamp = int((now or datetime.now(UTC)).timestamp())
        stmt = (
            insert(memos)
            .values(
                tag=tag,
                title=title,
                content=content,
                hero=b"",
                archived=False,
                created_at=stamp,
                updated_at=stamp,
            )
            .returning(*memos.c)
        )
        try:
            with self._engine.begin() as conn:
                row = conn.execute(stmt).mappings().one()
        except SQLAlchemyError as exc:
            raise _storage_error("create", exc) from exc
        memo = _row_to_memo(row)
        logger.info("Created memo id=%d tag=%r", memo.id, memo.tag)
        return memo
