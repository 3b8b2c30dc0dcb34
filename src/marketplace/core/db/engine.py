"""Engine for the marketplace connection pool."""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.marketplace.core.config import Settings, get_settings

_engine: AsyncEngine | None = None


def _ssl_context(ssl_mode: str) -> ssl.SSLContext | None:
    """Translate a libpq-style sslmode into an SSL context for asyncpg."""
    if ssl_mode == "disable":
        return None
    context = ssl.create_default_context()
    if ssl_mode in ("verify-ca", "verify-full"):
        context.check_hostname = ssl_mode == "verify-full"
        context.verify_mode = ssl.CERT_REQUIRED
    else:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def pool_connect_args(settings: Settings) -> dict[str, Any]:
    """asyncpg connect arguments for every pooled connection.

    Connections are tagged with the app name so marketplace sessions can be
    picked out in pg_stat_activity, and carry a lock_timeout so a decision
    blocked behind another request's row lock fails instead of hanging.
    """
    connect_args: dict[str, Any] = {
        "server_settings": {
            "application_name": settings.app_name,
            "lock_timeout": str(settings.database_lock_timeout_ms),
        }
    }
    context = _ssl_context(settings.database_ssl_mode)
    if context is not None:
        connect_args["ssl"] = context
    return connect_args


def get_engine() -> AsyncEngine:
    """Shared engine for request sessions and the notification session."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_recycle=settings.database_pool_recycle_seconds,
            pool_pre_ping=True,
            connect_args=pool_connect_args(settings),
        )
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
