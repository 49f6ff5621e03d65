"""Custom SQLAlchemy types.

Types included:
- UTCDateTime: Timezone-aware UTC timestamps on every backend
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, TypeDecorator

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect


class UTCDateTime(TypeDecorator[datetime]):
    """Timestamp column that always round-trips as an aware UTC datetime.

    PostgreSQL stores ``timestamptz`` natively. SQLite has no zone support and
    returns naive values, which are read back as UTC. Binds are normalized to
    UTC first so that text comparison on SQLite matches chronological order;
    keyset predicates over timestamps rely on this.

    Example:
        >>> class Game(Base, IntegerPKMixin):
        ...     created_at: Mapped[datetime] = mapped_column(UTCDateTime())
        >>>
        >>> game.created_at.tzinfo  # always UTC after a load
        datetime.timezone.utc
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        """Normalize to UTC before storing; naive values are assumed to be UTC."""
        _ = dialect
        if value is None:
            return None
        return as_utc(value)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        """Attach UTC to naive values coming back from zone-less backends."""
        _ = dialect
        if value is None:
            return None
        return as_utc(value)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive input is taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


__all__ = ["UTCDateTime", "as_utc"]
