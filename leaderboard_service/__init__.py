"""Leaderboard service: games, scores and keyset-paginated score lists.

Layout:
    core/      settings, exceptions, database base classes, pagination engine
    features/  games and scores (models, schemas, repositories, services)
    infra/     logging and database engine/session wiring
    cli/       ``leaderboard`` management command
"""

__version__ = "0.1.0"
