"""Database engine and session management.

The engine is created lazily from ``DatabaseSettings`` on first use, so
importing this module never opens a connection. Tests build their own
engine with :func:`build_engine` and pass sessions to repositories directly.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from leaderboard_service.core.settings import DatabaseSettings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def build_engine(settings: DatabaseSettings | None = None) -> AsyncEngine:
    """Create an async engine for ``settings.url``.

    Pool options apply to server databases only (see
    ``DatabaseSettings.sqlalchemy_engine_kwargs``).
    """
    settings = settings or get_db_settings()
    engine = create_async_engine(settings.url, **settings.sqlalchemy_engine_kwargs())
    _instrument_pool(engine)
    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by the application and the test fixtures."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Process-wide engine, created on first call."""
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory bound to :func:`get_engine`."""
    global _sessionmaker
    if _sessionmaker is None:
        _sessionmaker = build_sessionmaker(get_engine())
    return _sessionmaker


# ============================================================================
# Pool events
# ============================================================================


def _instrument_pool(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine.pool, "connect")
    def _receive_connect(dbapi_conn: Any, connection_record: Any) -> None:
        _ = dbapi_conn, connection_record
        logger.debug("Database connection established")

    @event.listens_for(engine.sync_engine.pool, "close")
    def _receive_close(dbapi_conn: Any, connection_record: Any) -> None:
        _ = dbapi_conn, connection_record
        logger.debug("Database connection closed")


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Commits when the block exits normally and rolls back on any exception.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            page = await GameService(session).list_games()
    """
    async with get_sessionmaker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_database(*, create_schema: bool | None = None) -> None:
    """Check connectivity and optionally create the schema.

    Args:
        create_schema: Run ``metadata.create_all`` (tables, indexes and the
            cascade triggers). Defaults to ``DatabaseSettings.create_schema``.

    Raises:
        SQLAlchemyError: The database is unreachable or schema creation failed.
    """
    settings = get_db_settings()
    if create_schema is None:
        create_schema = settings.create_schema

    engine = get_engine()
    url = engine.url.render_as_string(hide_password=True)
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if create_schema:
                from leaderboard_service.core.models import metadata

                await conn.run_sync(metadata.create_all)
    except Exception as e:
        logger.error(
            "Failed to initialize database",
            extra={"url": url, "error": str(e)},
        )
        raise

    logger.info(
        "Database connection established successfully",
        extra={"url": url, "create_schema": create_schema},
    )


async def close_database() -> None:
    """Dispose of the process-wide engine.

    This should be called during application shutdown.
    """
    global _engine, _sessionmaker
    if _engine is None:
        return

    logger.info("Closing database connection")
    await _engine.dispose()
    _engine = None
    _sessionmaker = None
    logger.info("Database connection closed successfully")


__all__ = [
    "build_engine",
    "build_sessionmaker",
    "close_database",
    "get_async_session",
    "get_engine",
    "get_sessionmaker",
    "init_database",
]
