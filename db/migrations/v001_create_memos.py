"""Migration 001: create the memos table and its tag index.

A ``memos`` table left by an older build is reconciled instead of
recreated: missing data columns are added with an ``ALTER TABLE``, and
a table that lacks the ``id`` key cannot be reconciled.
"""

import logging

from sqlalchemy import Connection, inspect, text

from core.memo.errors import StorageError
from db.schema import memos

logger = logging.getLogger(__name__)

# SQL default applied to existing rows when a column is added.
ADDABLE_COLUMN_DEFAULTS: dict[str, str] = {
    "hero": "X''",
    "tag": "''",
    "title": "''",
    "content": "''",
    "created_at": "0",
    "updated_at": "0",
    "archived": "0",
}


def run(conn: Connection) -> None:
    """Create ``memos`` with ``idx_memos_tag``, or bring an existing table up to it.

    Raises:
        StorageError: If an existing table is missing a column that cannot be added.
    """
    memos.create(conn, checkfirst=True)

    existing = {column["name"] for column in inspect(conn).get_columns("memos")}
    for column in memos.columns:
        if column.name in existing:
            continue
        default = ADDABLE_COLUMN_DEFAULTS.get(column.name)
        if default is None:
            raise StorageError(
                f"cannot reconcile table 'memos': column {column.name!r} is missing "
                "and cannot be added"
            )
        column_type = column.type.compile(dialect=conn.dialect)
        conn.execute(
            text(
                f"ALTER TABLE memos ADD COLUMN {column.name} {column_type} "
                f"NOT NULL DEFAULT {default}"
            )
        )
        logger.info("Added missing column memos.%s", column.name)

    for index in memos.indexes:
        index.create(conn, checkfirst=True)
