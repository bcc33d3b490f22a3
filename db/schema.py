"""
Static table descriptors for the memos store.

The schema is declared here once as SQLAlchemy Core ``Table`` objects.
Migrations in ``db.migrations`` build the database from these
descriptors; nothing is reflected from the ``Memo`` value object.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    Table,
    Text,
    false,
)

metadata = MetaData()

memos = Table(
    "memos",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("hero", LargeBinary, nullable=False, default=b""),
    Column("tag", Text, nullable=False, default=""),
    Column("title", Text, nullable=False, default=""),
    Column("content", Text, nullable=False, default=""),
    Column("created_at", Integer, nullable=False),
    Column("updated_at", Integer, nullable=False),
    Column("archived", Boolean, nullable=False, default=False, server_default=false()),
    Index("idx_memos_tag", "tag"),
)

schema_version = Table(
    "schema_version",
    metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
    Column("applied_at", Integer, nullable=False),
)
