"""Error taxonomy for the memo system.

Every failure a request handler can surface derives from ``MemoError`` so
routes catch a single type and render the error view.
"""

from __future__ import annotations


class MemoError(Exception):
    """Base class for memo failures surfaced to HTTP clients."""


class BindError(MemoError):
    """Raised when the create form is malformed or missing fields.

    Args:
        fields: Names of the offending form fields.
        detail: Human-readable description.
    """

    def __init__(self, fields: list[str], detail: str) -> None:
        self.fields = fields
        super().__init__(detail)


class StorageError(MemoError):
    """Raised when the relational store fails (connection, query, schema).

    The original exception is always chained as ``__cause__``.
    """


class NotFound(MemoError):
    """Raised when no memo exists with the requested id.

    Args:
        memo_id: The id that was looked up.
    """

    def __init__(self, memo_id: int) -> None:
        self.memo_id = memo_id
        super().__init__(f"memo not found: {memo_id}")
