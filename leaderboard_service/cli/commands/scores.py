"""Score commands.

Example:bash
    leaderboard scores submit a1b2c3 9500 --user-name alice --user-id u-1
    leaderboard scores list a1b2c3 --sort-by date --order asc
"""

import sys

import click

from leaderboard_service.cli.utils import (
    coro,
    echo_json,
    echo_table,
    error,
    page_footer,
    success,
)
from leaderboard_service.core.database import RepositoryError
from leaderboard_service.core.exceptions import AppException
from leaderboard_service.core.pagination import ScoreQueryParams, ScoreSortField, SortOrder
from leaderboard_service.features.scores import ScoreCreate, ScoreService
from leaderboard_service.infra.database import get_async_session

SCORE_COLUMNS = ["id", "user_name", "score", "score_val", "submitted_at"]


@click.group(name="scores")
def scores() -> None:
    """Submit and list scores."""


@scores.command(name="list")
@click.argument("game_hex_id")
@click.option("--cursor", default=None, help="Cursor from a previous page")
@click.option("--limit", default=None, type=int, help="Page size (1-100)")
@click.option(
    "--sort-by",
    type=click.Choice([field.value for field in ScoreSortField]),
    default=None,
    help="Sort key (default: score)",
)
@click.option(
    "--order",
    type=click.Choice([order.value for order in SortOrder]),
    default=None,
    help="Direction (default: desc)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw page as JSON")
@coro
async def list_scores(
    game_hex_id: str,
    cursor: str | None,
    limit: int | None,
    sort_by: str | None,
    order: str | None,
    as_json: bool,
) -> None:
    """List one game's scores."""
    query = ScoreQueryParams(
        game_hex_id=game_hex_id,
        cursor=cursor,
        limit=limit,
        sort_by=sort_by,
        order=order,
    )
    try:
        async with get_async_session() as session:
            page = await ScoreService(session).query_scores(query)
    except (AppException, RepositoryError) as e:
        error(str(e))
        sys.exit(1)

    if as_json:
        echo_json(page)
        return
    echo_table([score.model_dump() for score in page.data], SCORE_COLUMNS)
    page_footer(page.has_more, page.next_cursor, page.total_returned)


@scores.command()
@click.argument("game_hex_id")
@click.argument("score")
@click.option("--user-name", required=True, help="Display name")
@click.option("--user-id", required=True, help="Stable user identifier")
@click.option("--score-val", type=float, default=None, help="Numeric value (default: parsed from SCORE)")
@coro
async def submit(
    game_hex_id: str,
    score: str,
    user_name: str,
    user_id: str,
    score_val: float | None,
) -> None:
    """Submit a score for a game."""
    try:
        payload = ScoreCreate(
            game_hex_id=game_hex_id,
            score=score,
            score_val=score_val,
            user_name=user_name,
            user_id=user_id,
        )
        async with get_async_session() as session:
            created = await ScoreService(session).submit_score(payload)
    except (AppException, RepositoryError, ValueError) as e:
        error(str(e))
        sys.exit(1)

    success(f"Score submitted: id={created.id} score_val={created.score_val}")


@scores.command()
@click.argument("score_id", type=int)
@coro
async def delete(score_id: int) -> None:
    """Soft-delete a score."""
    try:
        async with get_async_session() as session:
            await ScoreService(session).delete_score(score_id)
    except (AppException, RepositoryError) as e:
        error(str(e))
        sys.exit(1)

    success(f"Score deleted: {score_id}")


@scores.command()
@click.argument("score_id", type=int)
@coro
async def restore(score_id: int) -> None:
    """Restore a soft-deleted score."""
    try:
        async with get_async_session() as session:
            restored = await ScoreService(session).restore_score(score_id)
    except (AppException, RepositoryError) as e:
        error(str(e))
        sys.exit(1)

    echo_json(restored)
