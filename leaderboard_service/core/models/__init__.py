"""Database models package.

Import all models here so ``Base.metadata`` knows every table, index and
trigger before Alembic or ``init_database`` uses it.
"""

from __future__ import annotations

from leaderboard_service.core.database.base import Base
from leaderboard_service.features.games.models import Game
from leaderboard_service.features.scores.models import Score

metadata = Base.metadata

__all__ = ["Game", "Score", "metadata"]
