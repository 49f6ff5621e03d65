"""Main CLI entry point for leaderboard-service management commands."""

import click

from leaderboard_service import __version__
from leaderboard_service.cli.commands import database, games, scores
from leaderboard_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="leaderboard-service")
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this invocation")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Leaderboard Service CLI - games, scores and database management.

    \b
    Command Groups:
      db      Database migrations and connectivity
      games   Create, list, delete and restore games
      scores  Submit and list scores

    \b
    Quick Start:
      leaderboard db upgrade                    # Apply migrations
      leaderboard games create "Tetris"         # Prints the game's hex id
      leaderboard scores submit <hex_id> 9500 --user-name alice --user-id u-1
      leaderboard scores list <hex_id> --sort-by date
    """
    ctx.ensure_object(dict)
    overrides = {"log_level": log_level} if log_level else {}
    setup_logging(**overrides)


cli.add_command(database.db)
cli.add_command(games.games)
cli.add_command(scores.scores)


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
