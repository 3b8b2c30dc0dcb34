"""Security utilities.

Re-exports token helpers for convenience.
"""

from src.marketplace.core.security.tokens import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "create_access_token",
    "decode_token",
]
