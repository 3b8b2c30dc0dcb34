"""Timestamp helpers shared by every table."""

from datetime import UTC, datetime
from typing import Any


def utc_now() -> datetime:
    """Current UTC time, naive (columns are TIMESTAMP WITHOUT TIME ZONE)."""
    return datetime.now(UTC).replace(tzinfo=None)


def touch(entity: Any) -> datetime:
    """Stamp a row's updated_at with the current time and return that time.

    Decisions reuse the returned value for decided_at / completed_at so one
    state change carries a single timestamp.
    """
    entity.updated_at = utc_now()
    return entity.updated_at
