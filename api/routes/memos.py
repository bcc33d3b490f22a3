"""HTML pages and the create action for memos.

Each handler runs exactly one query-layer operation.  Any ``MemoError``
(bad form input, storage failure) is rendered through the error view
with status 500 and the raw error message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from api.deps import get_memo_store
from api.schemas.memo import parse_memo_form
from api.views import view_response
from core.memo.errors import MemoError
from core.memo.types import Memo
from db.memo_store import MemoStore
from infrastructure.metrics import LatencyTimer, record_memo_created, record_request

logger = logging.getLogger(__name__)
router = APIRouter(tags=["memos"])

Store = Annotated[MemoStore, Depends(get_memo_store)]


def _error_response(route: str, exc: MemoError) -> HTMLResponse:
    logger.warning("%s failed: %s", route, exc)
    return view_response("error.html", {"message": str(exc)}, status_code=500)


def _memo_page(
    route: str,
    view: str,
    load: Callable[[], list[Memo]],
    **context: Any,
) -> HTMLResponse:
    """Run *load* once and render *view* with its memos, or the error view."""
    with LatencyTimer() as t:
        try:
            memos = load()
        except MemoError as exc:
            response = _error_response(route, exc)
        else:
            response = view_response(view, {"memos": memos, **context})
    record_request(route=route, status=response.status_code, latency_seconds=t.elapsed)
    return response


@router.get("/", response_class=HTMLResponse)
def list_memos(store: Store) -> HTMLResponse:
    """List every memo that is not archived."""
    return _memo_page("list", "list.html", store.list_active)


# NOTE: literal *.html routes are registered BEFORE /{tag} so they are not
# captured as tag names.


@router.get("/create.html", response_class=HTMLResponse)
def create_form() -> HTMLResponse:
    """Render the empty create form. Never touches storage."""
    with LatencyTimer() as t:
        response = view_response("create.html")
    record_request(route="create_form", status=response.status_code, latency_seconds=t.elapsed)
    return response


@router.get("/timeline.html", response_class=HTMLResponse)
def timeline(store: Store) -> HTMLResponse:
    """Non-archived memos grouped by creation day."""
    return _memo_page("timeline", "timeline.html", store.list_active)


@router.post("/memo/create", response_class=HTMLResponse)
async def create_memo(request: Request, store: Store) -> Response:
    """Bind the submitted form, insert one memo, and redirect to the list."""
    with LatencyTimer() as t:
        try:
            form = parse_memo_form(await request.form())
            memo = await run_in_threadpool(store.create, form.tag, form.title, form.content)
        except MemoError as exc:
            response: Response = _error_response("create", exc)
        else:
            record_memo_created()
            logger.debug("Redirecting after create of memo %d", memo.id)
            response = RedirectResponse(url="/", status_code=302)
    record_request(route="create", status=response.status_code, latency_seconds=t.elapsed)
    return response


@router.get("/{tag}", response_class=HTMLResponse)
def list_memos_by_tag(tag: str, store: Store) -> HTMLResponse:
    """List memos whose tag matches exactly, archived ones included."""
    return _memo_page("tag", "list.html", lambda: store.list_by_tag(tag), tag=tag)
