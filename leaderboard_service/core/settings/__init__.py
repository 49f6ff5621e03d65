"""Modular Pydantic Settings v2 configuration.

Settings are grouped by domain (database, logging, pagination), read from
environment variables and an optional ``.env`` file, frozen after
validation, and cached by the loaders in :mod:`.loader`.

    from leaderboard_service.core.settings import get_pagination_settings

    repo = GameRepository(get_pagination_settings())
"""

from __future__ import annotations

from .database import DatabaseSettings
from .loader import (
    clear_all_caches,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationSettings

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "DatabaseSettings",
    "LoggingSettings",
    "PaginationSettings",
    "clear_all_caches",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
