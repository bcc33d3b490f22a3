from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from api.routes.memos import router as memos_router
from api.routes.ops import router as ops_router
from api.views import STATIC_DIR
from core.config import DEFAULT_SETTINGS, Settings
from db.memo_store import MemoStore


def create_app(store: MemoStore, settings: Settings = DEFAULT_SETTINGS) -> FastAPI:
    """Build the web application around an already-open storage client.

    The interactive docs routes are disabled: ``/docs`` and ``/redoc``
    would otherwise shadow tags of the same name.

    Args:
        store: Migrated ``MemoStore`` shared by every request.
        settings: Process configuration, kept on ``app.state`` for reference.
    """
    app = FastAPI(title="Memos", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.store = store
    app.state.settings = settings

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.include_router(ops_router)
    app.include_router(memos_router)
    return app
