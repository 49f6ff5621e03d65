"""Games feature package."""

from .models import Game
from .repository import GameRepository, get_game_repository
from .schemas import GameCreate, GameResponse, GameUpdate
from .service import GameService

__all__ = [
    "Game",
    "GameCreate",
    "GameRepository",
    "GameResponse",
    "GameService",
    "GameUpdate",
    "get_game_repository",
]
