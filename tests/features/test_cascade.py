"""Game soft-delete visibility cascade, enforced by the store's triggers."""
from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select

from leaderboard_service.core.database import NotFoundError
from leaderboard_service.features.games import Game, GameRepository
from leaderboard_service.features.scores import Score, ScoreRepository
from tests.utils import BASE_TIME

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

pytestmark = pytest.mark.integration

GAME = "c0ffee"
OTHER_GAME = "bada55"


@pytest.fixture
def games(pagination_settings) -> GameRepository:
    return GameRepository(pagination_settings)


@pytest.fixture
def scores(pagination_settings) -> ScoreRepository:
    return ScoreRepository(pagination_settings)


async def _visible_ids(session: AsyncSession, repo: ScoreRepository, hex_id: str) -> list[int]:
    page = await repo.list_by_game(session, hex_id, None)
    return sorted(s.id for s in page.data)


async def test_deleting_game_hides_its_scores(
    db_session: AsyncSession, games, scores, make_game, make_score
) -> None:
    await make_game(hex_id=GAME)
    await make_game(hex_id=OTHER_GAME)
    first = await make_score(GAME, 10.0)
    await make_score(GAME, 20.0)
    other = await make_score(OTHER_GAME, 30.0)

    await games.soft_delete(db_session, GAME)

    assert await _visible_ids(db_session, scores, GAME) == []
    assert await _visible_ids(db_session, scores, OTHER_GAME) == [other.id]
    with pytest.raises(NotFoundError):
        await scores.get_by_id(db_session, first.id)


async def test_cascade_stamps_game_deleted_at(
    db_session: AsyncSession, games, make_game, make_score
) -> None:
    await make_game(hex_id=GAME)
    score = await make_score(GAME, 10.0)

    await games.soft_delete(db_session, GAME)

    game_deleted_at = (await games.get_by(db_session, Game.hex_id, GAME, include_deleted=True)).deleted_at
    score_row = (
        await db_session.execute(
            select(Score).where(Score.id == score.id).execution_options(populate_existing=True)
        )
    ).scalar_one()
    assert game_deleted_at is not None
    assert score_row.deleted_at == game_deleted_at


async def test_restoring_game_restores_only_cascaded_scores(
    db_session: AsyncSession, games, scores, make_game, make_score
) -> None:
    """A score deleted on its own before the game stays deleted."""
    await make_game(hex_id=GAME)
    kept = await make_score(GAME, 10.0)
    also_kept = await make_score(GAME, 20.0)
    deleted_earlier = await make_score(GAME, 30.0, deleted_at=BASE_TIME)

    await games.soft_delete(db_session, GAME)
    await games.restore(db_session, GAME)

    assert await _visible_ids(db_session, scores, GAME) == sorted([kept.id, also_kept.id])
    with pytest.raises(NotFoundError):
        await scores.get_by_id(db_session, deleted_earlier.id)


async def test_reused_hex_id_does_not_resurface_old_scores(
    db_session: AsyncSession, games, scores, make_game, make_score
) -> None:
    await make_game("Old", hex_id=GAME)
    await make_score(GAME, 10.0)
    await games.soft_delete(db_session, GAME)

    await make_game("New", hex_id=GAME)

    assert await _visible_ids(db_session, scores, GAME) == []
    fresh = await make_score(GAME, 99.0)
    assert await _visible_ids(db_session, scores, GAME) == [fresh.id]

