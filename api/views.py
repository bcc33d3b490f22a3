"""
Server-side HTML rendering.

``render_view`` is a pure function of a template name and a context
mapping.  Templates live in ``api/templates``; missing context values
render as empty strings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from itertools import groupby
from pathlib import Path
from typing import Any

from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from core.memo.types import Memo

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

VIEWS: frozenset[str] = frozenset({"list.html", "create.html", "timeline.html", "error.html"})


def format_timestamp(value: Any) -> str:
    """Format Unix seconds as ``YYYY-MM-DD HH:MM`` UTC; empty for missing values."""
    if not isinstance(value, int):
        return ""
    return datetime.fromtimestamp(value, tz=UTC).strftime("%Y-%m-%d %H:%M")


def group_by_day(memos: Iterable[Memo]) -> list[tuple[str, list[Memo]]]:
    """Group memos by UTC creation day, newest day and newest memo first."""
    ordered = sorted(memos, key=lambda m: (m.created_at, m.id), reverse=True)
    return [
        (day, list(items))
        for day, items in groupby(
            ordered,
            key=lambda m: datetime.fromtimestamp(m.created_at, tz=UTC).strftime("%Y-%m-%d"),
        )
    ]


templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.filters["timestamp"] = format_timestamp
templates.env.globals["group_by_day"] = group_by_day


def render_view(name: str, context: Mapping[str, Any] | None = None) -> bytes:
    """Render a view to UTF-8 HTML bytes.

    Raises:
        ValueError: If *name* is not a known view.
    """
    if name not in VIEWS:
        raise ValueError(f"Unknown view {name!r}, valid options: {sorted(VIEWS)}")
    template = templates.get_template(name)
    return template.render(dict(context or {})).encode("utf-8")


def view_response(
    name: str, context: Mapping[str, Any] | None = None, status_code: int = 200
) -> HTMLResponse:
    """Render *name* and wrap it in an ``HTMLResponse``."""
    return HTMLResponse(content=render_view(name, context), status_code=status_code)
