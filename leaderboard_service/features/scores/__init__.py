"""Scores feature package."""

from .models import Score
from .repository import ScoreRepository, get_score_repository
from .schemas import ScoreCreate, ScoreResponse, ScoreUpdate, derive_score_val
from .service import ScoreService

__all__ = [
    "Score",
    "ScoreCreate",
    "ScoreRepository",
    "ScoreResponse",
    "ScoreService",
    "ScoreUpdate",
    "derive_score_val",
    "get_score_repository",
]
