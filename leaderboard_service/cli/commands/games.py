"""Game management commands.

Example:bash
    leaderboard games create "Space Invaders" --description "Arcade classic"
    leaderboard games list --limit 10
    leaderboard games list --cursor eyJoZXhfaWQiOiJhMWIyYzMiLCJjcmVhdGVkX2F0Ijoi...
    leaderboard games delete a1b2c3
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
from leaderboard_service.core.pagination import PaginationParams
from leaderboard_service.features.games import GameCreate, GameService
from leaderboard_service.infra.database import get_async_session

GAME_COLUMNS = ["hex_id", "name", "created_at", "description"]


@click.group(name="games")
def games() -> None:
    """Create, list and soft-delete games."""


@games.command(name="list")
@click.option("--cursor", default=None, help="Cursor from a previous page")
@click.option("--limit", default=None, type=int, help="Page size (1-100)")
@click.option("--json", "as_json", is_flag=True, help="Print the raw page as JSON")
@coro
async def list_games(cursor: str | None, limit: int | None, as_json: bool) -> None:
    """List games, newest first."""
    try:
        async with get_async_session() as session:
            page = await GameService(session).list_games(PaginationParams(cursor=cursor, limit=limit))
    except (AppException, RepositoryError) as e:
        error(str(e))
        sys.exit(1)

    if as_json:
        echo_json(page)
        return
    echo_table([game.model_dump() for game in page.data], GAME_COLUMNS)
    page_footer(page.has_more, page.next_cursor, page.total_returned)


@games.command()
@click.argument("name")
@click.option("--description", default=None, help="Optional description")
@coro
async def create(name: str, description: str | None) -> None:
    """Create a game and print its hex id."""
    try:
        payload = GameCreate(name=name, description=description)
        async with get_async_session() as session:
            game = await GameService(session).create_game(payload)
    except (AppException, RepositoryError, ValueError) as e:
        error(str(e))
        sys.exit(1)

    success(f"Game created: {game.hex_id}")


@games.command()
@click.argument("hex_id")
@coro
async def show(hex_id: str) -> None:
    """Show one game."""
    try:
        async with get_async_session() as session:
            game = await GameService(session).get_game(hex_id)
    except (AppException, RepositoryError) as e:
        error(str(e))
        sys.exit(1)

    echo_json(game)


@games.command()
@click.argument("hex_id")
@coro
async def delete(hex_id: str) -> None:
    """Soft-delete a game and hide its scores."""
    try:
        async with get_async_session() as session:
            await GameService(session).delete_game(hex_id)
    except (AppException, RepositoryError) as e:
        error(str(e))
        sys.exit(1)

    success(f"Game deleted: {hex_id}")


@games.command()
@click.argument("hex_id")
@coro
async def restore(hex_id: str) -> None:
    """Restore a soft-deleted game and the scores its deletion hid."""
    try:
        async with get_async_session() as session:
            await GameService(session).restore_game(hex_id)
    except (AppException, RepositoryError) as e:
        error(str(e))
        sys.exit(1)

    success(f"Game restored: {hex_id}")
