"""Core database package: declarative base, mixins, filters and repository.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming and constraint conventions
    - IntegerPKMixin: Auto-increment integer primary key
    - TimestampMixin: created_at, updated_at tracking
    - SoftDeleteMixin: Soft delete support with deleted_at

Types:
    - UTCDateTime: Timestamps that always load as aware UTC datetimes

Repository:
    - BaseRepository[T]: Visibility-aware reads, soft delete/restore and
      keyset pagination with explicit session passing

Query Filters:
    - StatementFilter: Base class for statement filters
    - SoftDeleteFilter: visible / deleted / all rows

Exceptions:
    - RepositoryError: Base exception for repository operations
    - NotFoundError: Entity not found among rows the operation may touch
    - HexIdExhaustedError: No free hex id could be generated

Example:
    from leaderboard_service.core.database import BaseRepository

    class GameRepository(BaseRepository[Game]):
        ...
"""

from leaderboard_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    IntegerPKMixin,
    SoftDeleteMixin,
    TimestampMixin,
    utc_now,
)
from leaderboard_service.core.database.exceptions import (
    HexIdExhaustedError,
    NotFoundError,
    RepositoryError,
)
from leaderboard_service.core.database.filters import SoftDeleteFilter, StatementFilter
from leaderboard_service.core.database.repository import BaseRepository
from leaderboard_service.core.database.types import UTCDateTime, as_utc

__all__ = [
    "NAMING_CONVENTION",
    # Base and mixins
    "Base",
    # Repository
    "BaseRepository",
    # Exceptions
    "HexIdExhaustedError",
    "IntegerPKMixin",
    "NotFoundError",
    "RepositoryError",
    "SoftDeleteFilter",
    "SoftDeleteMixin",
    # Filters
    "StatementFilter",
    "TimestampMixin",
    # Types
    "UTCDateTime",
    "as_utc",
    "utc_now",
]
