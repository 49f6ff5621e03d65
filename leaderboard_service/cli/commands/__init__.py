"""CLI command modules."""

from leaderboard_service.cli.commands import database, games, scores

__all__ = [
    "database",
    "games",
    "scores",
]
