"""Form schema for the memo create action, plus the explicit binder."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from core.memo.errors import BindError

FORM_FIELDS: tuple[str, ...] = ("tag", "title", "content")


class MemoForm(BaseModel):
    """Client-settable memo fields. Empty strings are allowed."""

    model_config = ConfigDict(strict=True, frozen=True)

    tag: str
    title: str
    content: str


def parse_memo_form(form: Mapping[str, Any]) -> MemoForm:
    """Bind a submitted form body to ``MemoForm`` field by field.

    Extra fields (``hero``, ``archived``, timestamps) are ignored; clients
    cannot set them.

    Args:
        form: Parsed ``application/x-www-form-urlencoded`` or multipart body.

    Raises:
        BindError: If a field is missing, is a file upload, or fails validation.
    """
    missing = [name for name in FORM_FIELDS if name not in form]
    if missing:
        raise BindError(missing, f"missing form field(s): {', '.join(missing)}")

    values: dict[str, str] = {}
    for name in FORM_FIELDS:
        value = form[name]
        if not isinstance(value, str):
            raise BindError([name], f"form field {name!r} must be text")
        values[name] = value

    try:
        return MemoForm(**values)
    except ValidationError as exc:
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        raise BindError(fields, f"invalid form field(s): {', '.join(fields)}") from exc
