"""
FastAPI dependency providers.

The storage client is built by the process bootstrap and attached to
``app.state`` by ``create_app``; this provider reads it back per request
instead of reaching for a module global.
"""

from fastapi import Request

from db.memo_store import MemoStore


def get_memo_store(request: Request) -> MemoStore:
    """Return the ``MemoStore`` the application was constructed with."""
    return request.app.state.store
