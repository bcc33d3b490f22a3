"""Memo types — pure value objects.

These are the core data contracts for the memo system.
No I/O, no datetime.now(), no imports from db/ or api/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Memo:
    """A single tagged text note.

    Rows edited directly in storage are loaded as-is, so the ordering of
    ``created_at`` and ``updated_at`` is only guaranteed for memos written
    by ``MemoStore.create``.

    Attributes:
        id: Storage-assigned integer identity. Never changes once assigned.
        tag: Free-text tag used for filtering. Not unique, not normalized.
        title: Short headline.
        content: Body text.
        created_at: Unix seconds, set once at insert. 0 when unknown.
        updated_at: Unix seconds, refreshed on every mutation. 0 when unknown.
        archived: If True, hidden from the default listing.
        hero: Optional opaque image blob. Empty when absent.
    """

    id: int
    tag: str
    title: str
    content: str
    created_at: int
    updated_at: int
    archived: bool = False
    hero: bytes = b""
