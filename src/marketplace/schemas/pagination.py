"""Cursor pages for the organizer's project list and the notification inbox."""

import base64
import binascii
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of rows, newest first.

    next_cursor is opaque to clients; pass it back unchanged for the next page.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Cursor for the next page, or None on the last page.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether older rows follow this page.",
    )


def encode_cursor(created_at: datetime) -> str:
    """Cursor pointing just past a row's created_at."""
    return base64.urlsafe_b64encode(created_at.isoformat().encode()).decode()


def decode_cursor(cursor: str) -> datetime:
    """Recover the created_at boundary from a cursor.

    Raises:
        ValueError: If the cursor was not produced by encode_cursor
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError("Invalid cursor") from e
    return datetime.fromisoformat(raw)
