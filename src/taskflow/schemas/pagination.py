"""Cursor pagination: response envelope and keyset cursors."""

import base64
from datetime import datetime
from typing import Generic, NamedTuple, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

from src.taskflow.models.base import to_utc_naive

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results, newest first.

    ``next_cursor`` is opaque to clients; they pass it back unchanged to
    fetch the following page.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Cursor for the next page. None on the last page.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether more items follow this page.",
    )


class CursorPosition(NamedTuple):
    """Last row of a page: its sort timestamp plus id to break ties."""

    at: datetime
    id: UUID


def encode_cursor(position: CursorPosition) -> str:
    raw = f"{position.at.isoformat()}|{position.id}"
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> CursorPosition:
    """Unwrap a cursor produced by ``encode_cursor``.

    Timestamps carrying an offset are brought to naive UTC, the form the
    timestamp columns store.

    Raises:
        ValueError: If the cursor is not base64 text of ``<iso timestamp>|<uuid>``
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
        at, _, row_id = raw.partition("|")
        return CursorPosition(to_utc_naive(datetime.fromisoformat(at)), UUID(row_id))
    except (ValueError, UnicodeDecodeError) as e:
        raise ValueError("Invalid cursor") from e
