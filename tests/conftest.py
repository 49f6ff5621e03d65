"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: cache isolation for the lru_cached loaders
    - Database Fixtures: in-memory SQLite engine and session with the full
      schema (tables, partial indexes and cascade triggers)
    - Data Factories: helpers that insert games and scores directly

Store-backed tests run against ``sqlite+aiosqlite:///:memory:``; every test
gets a fresh database.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from leaderboard_service.core.settings import PaginationSettings, clear_all_caches
from tests.utils import BASE_TIME

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from leaderboard_service.features.games.models import Game
    from leaderboard_service.features.scores.models import Score

# Keep tests independent of a developer's environment
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings_cache():
    """Drop cached settings before and after each test."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def pagination_settings() -> PaginationSettings:
    """Default pagination settings (page size 25)."""
    return PaginationSettings()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    Yields:
        Async SQLAlchemy engine connected to in-memory SQLite.
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Async session on a freshly created schema.

    Creates every table, index and trigger registered on the models'
    metadata, yields a session and rolls back afterwards.

    Example:
        async def test_create_game(db_session):
            game = await GameRepository().create(db_session, GameCreate(name="Tetris"))
            assert len(game.hex_id) == 6
    """
    from leaderboard_service.core.models import metadata
    from leaderboard_service.infra.database import build_sessionmaker

    async with db_engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    async with build_sessionmaker(db_engine)() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)


# ============================================================================
# Data Factories
# ============================================================================


@pytest.fixture
def make_game(db_session: AsyncSession) -> Callable[..., Awaitable[Game]]:
    """Insert a game row directly, with an optional explicit hex_id/created_at."""
    from leaderboard_service.features.games.models import Game

    counter = iter(range(1, 1_000_000))

    async def _make(
        name: str | None = None,
        *,
        hex_id: str | None = None,
        created_at: datetime | None = None,
        **kwargs: Any,
    ) -> Game:
        n = next(counter)
        game = Game(
            hex_id=hex_id or f"{n:06x}",
            name=name or f"Game {n}",
            **kwargs,
        )
        if created_at is not None:
            game.created_at = created_at
            game.updated_at = created_at
        db_session.add(game)
        await db_session.flush()
        await db_session.refresh(game)
        return game

    return _make


@pytest.fixture
def make_score(db_session: AsyncSession) -> Callable[..., Awaitable[Score]]:
    """Insert a score row directly; the display ``score`` defaults to ``str(score_val)``."""
    from leaderboard_service.features.scores.models import Score

    counter = iter(range(1, 1_000_000))

    async def _make(
        game_hex_id: str,
        score_val: float,
        *,
        user_name: str | None = None,
        user_id: str | None = None,
        submitted_at: datetime | None = None,
        **kwargs: Any,
    ) -> Score:
        n = next(counter)
        score = Score(
            game_hex_id=game_hex_id,
            score=kwargs.pop("score", str(score_val)),
            score_val=score_val,
            user_name=user_name or f"player{n:03d}",
            user_id=user_id or f"user-{n}",
            submitted_at=submitted_at or BASE_TIME + timedelta(minutes=n),
            **kwargs,
        )
        db_session.add(score)
        await db_session.flush()
        await db_session.refresh(score)
        return score

    return _make
