"""End-to-end leaderboard scenarios through the service layer."""
from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

import pytest

from leaderboard_service.core.database import NotFoundError
from leaderboard_service.core.pagination import (
    CursorCodec,
    PaginationParams,
    ScoreCursor,
    ScoreQueryParams,
    ScoreSortParams,
)
from leaderboard_service.features.games import GameCreate, GameRepository, GameService
from leaderboard_service.features.scores import ScoreCreate, ScoreRepository, ScoreService
from tests.utils import BASE_TIME

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

pytestmark = pytest.mark.integration


@pytest.fixture
def game_repo(pagination_settings) -> GameRepository:
    return GameRepository(pagination_settings)


@pytest.fixture
def score_service(db_session: AsyncSession, pagination_settings, game_repo) -> ScoreService:
    return ScoreService(db_session, ScoreRepository(pagination_settings), game_repo)


async def test_thirty_scores_two_pages(
    db_session: AsyncSession, score_service: ScoreService, make_game, make_score
) -> None:
    """30 distinct scores, sort score DESC, limit 25: 25 rows then 5."""
    await make_game(hex_id="a1b2c3")
    scores = [
        await make_score(
            "a1b2c3",
            100.0 + i * 1.5,
            submitted_at=BASE_TIME + timedelta(seconds=i),
        )
        for i in range(30)
    ]
    by_value = sorted(scores, key=lambda s: s.score_val, reverse=True)

    first = await score_service.list_game_scores("a1b2c3", PaginationParams(limit=25))

    assert [s.id for s in first.data] == [s.id for s in by_value[:25]]
    assert first.has_more is True
    cursor = CursorCodec.decode(first.next_cursor, ScoreCursor)
    assert cursor == ScoreCursor(id=by_value[24].id, sort_value="107.5")

    second = await score_service.list_game_scores(
        "a1b2c3", PaginationParams(cursor=first.next_cursor, limit=25)
    )

    assert [s.id for s in second.data] == [s.id for s in by_value[25:]]
    assert second.has_more is False
    assert second.next_cursor is None
    assert second.current_cursor == first.next_cursor


async def test_rows_inserted_between_pages_do_not_shift(
    db_session: AsyncSession, score_service: ScoreService, make_game, make_score
) -> None:
    """A new top score submitted mid-walk does not repeat or skip rows."""
    await make_game(hex_id="a1b2c3")
    for i in range(6):
        await make_score("a1b2c3", float(i * 10))

    first = await score_service.list_game_scores("a1b2c3", PaginationParams(limit=3))
    await make_score("a1b2c3", 1000.0)
    second = await score_service.list_game_scores(
        "a1b2c3", PaginationParams(cursor=first.next_cursor, limit=3)
    )

    assert [s.score_val for s in first.data] == [50.0, 40.0, 30.0]
    assert [s.score_val for s in second.data] == [20.0, 10.0, 0.0]
    assert second.has_more is False


async def test_query_scores_by_date(
    db_session: AsyncSession, score_service: ScoreService, make_game, make_score
) -> None:
    await make_game(hex_id="a1b2c3")
    newest = await make_score("a1b2c3", 1.0, submitted_at=BASE_TIME + timedelta(hours=2))
    oldest = await make_score("a1b2c3", 2.0, submitted_at=BASE_TIME)
    middle = await make_score("a1b2c3", 3.0, submitted_at=BASE_TIME + timedelta(hours=1))

    page = await score_service.query_scores(
        ScoreQueryParams(game_hex_id="a1b2c3", sort_by="date", order="desc")
    )

    assert [s.id for s in page.data] == [newest.id, middle.id, oldest.id]


async def test_submit_and_list(
    db_session: AsyncSession, score_service: ScoreService, game_repo: GameRepository
) -> None:
    game = await GameService(db_session, game_repo).create_game(GameCreate(name="Tetris"))

    for name, score in [("alice", "9500"), ("bob", "12000"), ("carol", "n/a")]:
        await score_service.submit_score(
            ScoreCreate(game_hex_id=game.hex_id, score=score, user_name=name, user_id=f"u-{name}")
        )

    by_score = await score_service.list_game_scores(game.hex_id)
    by_name = await score_service.list_game_scores(
        game.hex_id, sort=ScoreSortParams(sort_by="user_name", order="asc")
    )

    assert [s.user_name for s in by_score.data] == ["bob", "alice", "carol"]
    assert [s.user_name for s in by_name.data] == ["alice", "bob", "carol"]
    assert by_score.data[-1].score_val == 0.0


async def test_submit_for_missing_game(score_service: ScoreService) -> None:
    with pytest.raises(NotFoundError):
        await score_service.submit_score(
            ScoreCreate(game_hex_id="abcdef", score="1", user_name="alice", user_id="u-1")
        )


async def test_submit_for_deleted_game(
    db_session: AsyncSession, score_service: ScoreService, game_repo: GameRepository, make_game
) -> None:
    await make_game(hex_id="abcdef")
    await game_repo.soft_delete(db_session, "abcdef")

    with pytest.raises(NotFoundError):
        await score_service.submit_score(
            ScoreCreate(game_hex_id="abcdef", score="1", user_name="alice", user_id="u-1")
        )


async def test_delete_and_restore_score(
    db_session: AsyncSession, score_service: ScoreService, make_game, make_score
) -> None:
    await make_game(hex_id="a1b2c3")
    score = await make_score("a1b2c3", 5.0)

    await score_service.delete_score(score.id)
    with pytest.raises(NotFoundError):
        await score_service.get_score(score.id)

    restored = await score_service.restore_score(score.id)

    assert restored.id == score.id
    assert (await score_service.get_score(score.id)).score_val == 5.0
