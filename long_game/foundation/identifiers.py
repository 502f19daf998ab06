"""ID generation for sessions and recorded decisions."""

from __future__ import annotations

from uuid import UUID, uuid4


def new_id() -> UUID:
    """Session ids: random UUID v4, used as-is in URLs."""
    return uuid4()


def new_record_id() -> str:
    """Ids for audit records stored inside a game state.

    Kept as plain hex strings so states serialize without UUID handling.
    """
    return uuid4().hex
