"""Async engine and request-scoped sessions for the trade store.

The purchase flow commits the pending trade itself before calling out to the
rate source and Stripe; ``get_session`` commits whatever is left (webhook
audit rows, paid transitions) when the request finishes.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from paygate.core.config import DatabaseSettings, get_settings
from paygate.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def engine_options(database: DatabaseSettings, debug: bool = False) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": database.echo or debug}
    if database.url.startswith("sqlite"):
        # SQLite serialises writers; wait for the lock instead of failing the paid transition
        options["connect_args"] = {"timeout": database.busy_timeout}
        return options

    options["pool_pre_ping"] = True
    if database.pool_size is not None:
        options["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        options["max_overflow"] = database.max_overflow
    return options


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            settings.database_url,
            **engine_options(settings.database, settings.debug),
        )
        _session_factory = async_sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    assert _session_factory is not None
    return _session_factory


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create ``trades`` and ``payment_webhook_events`` directly.

    Intended for local SQLite setups; deployed databases go through alembic.
    """
    from paygate.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
