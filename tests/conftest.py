"""
Shared fixtures for the test suite.

Centralizes reusable test infrastructure so individual test files
don't need to repeat store/app construction boilerplate.
"""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from api.main import create_app
from core.config import Settings
from db.memo_store import MemoStore
from db.schema import memos

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

FROZEN_NOW = datetime(2026, 2, 21, 12, 0, 0, tzinfo=UTC)
"""Deterministic insert time for store tests."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def archive(store: MemoStore, memo_id: int) -> None:
    """Flip ``archived`` directly in storage (no HTTP or store API does this)."""
    with store._engine.begin() as conn:
        conn.execute(update(memos).where(memos.c.id == memo_id).values(archived=True))


# ---------------------------------------------------------------------------
# Store and client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(db_file=str(tmp_path / "memos.db"))


@pytest.fixture()
def store(settings: Settings):  # type: ignore[no-untyped-def]
    """Migrated ``MemoStore`` backed by a fresh SQLite file."""
    memo_store = MemoStore.from_settings(settings)
    yield memo_store
    memo_store.close()


@pytest.fixture()
def api_client(store: MemoStore, settings: Settings):  # type: ignore[no-untyped-def]
    """``TestClient`` for an app built around the ``store`` fixture.

    Redirects are not followed so tests can assert on the 302 itself.
    """
    app = create_app(store, settings)
    with TestClient(app, follow_redirects=False) as c:
        yield c
