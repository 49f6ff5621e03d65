"""Database infrastructure package.

Example:
    from leaderboard_service.infra.database import (
        get_alembic_commands,
        get_async_session,
        init_database,
    )

    await get_alembic_commands().upgrade("head")
    await init_database()

    async with get_async_session() as session:
        page = await GameService(session).list_games()
"""

from .alembic import AlembicCommandConfig, AlembicCommands, get_alembic_commands
from .session import (
    build_engine,
    build_sessionmaker,
    close_database,
    get_async_session,
    get_engine,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "AlembicCommandConfig",
    "AlembicCommands",
    "build_engine",
    "build_sessionmaker",
    "close_database",
    "get_alembic_commands",
    "get_async_session",
    "get_engine",
    "get_sessionmaker",
    "init_database",
]
