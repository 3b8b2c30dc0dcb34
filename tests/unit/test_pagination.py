"""Tests for created_at page cursors."""

from datetime import datetime

import pytest

from src.marketplace.schemas.pagination import decode_cursor, encode_cursor

pytestmark = pytest.mark.unit


def test_cursor_carries_created_at():
    created_at = datetime(2026, 3, 14, 9, 26, 53, 589793)

    assert decode_cursor(encode_cursor(created_at)) == created_at


@pytest.mark.parametrize("cursor", ["not base64!", "aGVsbG8="])
def test_foreign_cursor_is_rejected(cursor):
    with pytest.raises(ValueError):
        decode_cursor(cursor)
