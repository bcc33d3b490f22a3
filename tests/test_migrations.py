"""Tests for db/migrations — versioned schema setup."""

from pathlib import Path

import pytest
from sqlalchemy import inspect, insert, select, text

from core.config import Settings
from core.memo.errors import StorageError
from db.memo_store import MemoStore
from db.migrations import LATEST_VERSION, MIGRATIONS, current_version, run_migrations
from db.schema import schema_version
from db.session import create_storage_engine


@pytest.fixture()
def engine(tmp_path: Path):  # type: ignore[no-untyped-def]
    eng = create_storage_engine(str(tmp_path / "migrate.db"))
    yield eng
    eng.dispose()


class TestMigrationRegistry:
    def test_versions_strictly_increase(self) -> None:
        versions = [m.version for m in MIGRATIONS]
        assert versions == sorted(set(versions))

    def test_latest_version_matches_last_step(self) -> None:
        assert LATEST_VERSION == MIGRATIONS[-1].version == 1


class TestRunMigrations:
    def test_fresh_database_reaches_latest(self, engine) -> None:  # type: ignore[no-untyped-def]
        assert run_migrations(engine, now=100) == LATEST_VERSION

    def test_creates_memos_table_with_columns(self, engine) -> None:  # type: ignore[no-untyped-def]
        run_migrations(engine)
        columns = {c["name"] for c in inspect(engine).get_columns("memos")}
        assert columns == {
            "id",
            "hero",
            "tag",
            "title",
            "content",
            "created_at",
            "updated_at",
            "archived",
        }

    def test_creates_tag_index(self, engine) -> None:  # type: ignore[no-untyped-def]
        run_migrations(engine)
        names = {ix["name"] for ix in inspect(engine).get_indexes("memos")}
        assert "idx_memos_tag" in names

    def test_records_applied_version(self, engine) -> None:  # type: ignore[no-untyped-def]
        run_migrations(engine, now=100)
        with engine.connect() as conn:
            rows = conn.execute(select(schema_version)).mappings().all()
        assert [(r["version"], r["name"], r["applied_at"]) for r in rows] == [
            (1, "create_memos", 100)
        ]

    def test_second_run_is_noop(self, engine) -> None:  # type: ignore[no-untyped-def]
        run_migrations(engine, now=100)
        assert run_migrations(engine, now=200) == LATEST_VERSION
        with engine.connect() as conn:
            assert current_version(conn) == LATEST_VERSION
            count = len(conn.execute(select(schema_version)).all())
        assert count == len(MIGRATIONS)

    def test_newer_database_raises_storage_error(self, engine) -> None:  # type: ignore[no-untyped-def]
        run_migrations(engine)
        with engine.begin() as conn:
            conn.execute(
                insert(schema_version).values(version=LATEST_VERSION + 1, name="future", applied_at=0)
            )
        with pytest.raises(StorageError, match="newer than supported"):
            run_migrations(engine)


class TestReconcileExistingTable:
    def test_adds_missing_columns(self, engine) -> None:  # type: ignore[no-untyped-def]
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE memos (id INTEGER PRIMARY KEY, tag TEXT)"))
            conn.execute(text("INSERT INTO memos (id, tag) VALUES (1, 'work')"))

        assert run_migrations(engine) == LATEST_VERSION

        columns = {c["name"] for c in inspect(engine).get_columns("memos")}
        assert {"hero", "title", "content", "created_at", "updated_at", "archived"} <= columns
        names = {ix["name"] for ix in inspect(engine).get_indexes("memos")}
        assert "idx_memos_tag" in names

    def test_existing_rows_readable_after_reconcile(self, engine) -> None:  # type: ignore[no-untyped-def]
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE memos (id INTEGER PRIMARY KEY, tag TEXT)"))
            conn.execute(text("INSERT INTO memos (id, tag) VALUES (1, 'work')"))
        run_migrations(engine)

        store = MemoStore(engine)
        [memo] = store.list_active()
        assert memo.tag == "work"
        assert memo.title == ""
        assert memo.archived is False
        assert store.create("work", "new", "Body").id == 2

    def test_null_timestamps_load_as_zero(self, engine) -> None:  # type: ignore[no-untyped-def]
        with engine.begin() as conn:
            conn.execute(
                text(
                    "CREATE TABLE memos (id INTEGER PRIMARY KEY, tag TEXT, "
                    "created_at INTEGER, updated_at INTEGER)"
                )
            )
            conn.execute(text("INSERT INTO memos (id, tag) VALUES (1, 'work')"))
        run_migrations(engine)

        memo = MemoStore(engine).get_by_id(1)
        assert memo.created_at == 0
        assert memo.updated_at == 0

    def test_table_without_id_raises_storage_error(self, tmp_path: Path) -> None:
        db_file = str(tmp_path / "legacy.db")
        legacy = create_storage_engine(db_file)
        with legacy.begin() as conn:
            conn.execute(text("CREATE TABLE memos (tag TEXT, title TEXT)"))
        legacy.dispose()

        with pytest.raises(StorageError, match="column 'id' is missing"):
            MemoStore.from_settings(Settings(db_file=db_file))
