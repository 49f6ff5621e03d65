"""Minimal generic repository for soft-deletable SQLAlchemy models.

Provides visibility-aware reads, lifecycle updates and keyset pagination with
explicit session passing. For queries not covered here, use the session
directly - this is a convenience, not a cage.

Every read filters ``deleted_at IS NULL`` unless told otherwise. Soft delete
and restore are single UPDATE statements; when no row matches, the caller
gets NotFoundError whether the row never existed or was already in the
target state.

Example:
    class GameRepository(BaseRepository[Game]):
        async def get_by_hex_id(self, session: AsyncSession, hex_id: str) -> Game:
            return await self.get_by_or_raise(session, Game.hex_id, hex_id)

    repo = GameRepository(Game)
    game = await repo.get_by_or_raise(session, Game.hex_id, "a1b2c3")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from sqlalchemy import Select, select, update

from leaderboard_service.core.database.base import utc_now
from leaderboard_service.core.database.exceptions import NotFoundError
from leaderboard_service.core.database.filters import SoftDeleteFilter
from leaderboard_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

    from leaderboard_service.core.pagination.filters import KeysetFilter
    from leaderboard_service.core.pagination.schemas import PaginatedResponse


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Minimal generic repository for soft-deletable models.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by(session, attr, value) -> T | None
        - get_by_or_raise(session, attr, value) -> T
        - add(session, instance) -> T
        - apply_changes(session, instance, values) -> T
        - soft_delete_where(session, *criteria) -> None
        - restore_where(session, *criteria) -> None
        - paginate_keyset(session, statement, keyset, ...) -> PaginatedResponse[T]

    The model must carry ``deleted_at`` (SoftDeleteMixin). Session is always
    explicit - no hidden state.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Game, Score)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    # ──────────────────────────────────────────────────────────────
    # Reads
    # ──────────────────────────────────────────────────────────────

    def visible(self, statement: Select[Any] | None = None) -> Select[Any]:
        """``statement`` (default ``select(model)``) restricted to visible rows."""
        if statement is None:
            statement = select(self.model)
        return SoftDeleteFilter(self.model).apply(statement)

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        include_deleted: bool = False,
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value
            include_deleted: Also return soft-deleted rows

        Returns:
            Entity if found and visible, None otherwise
        """
        instance = await self.get_by(session, self._pk_attr(), id, include_deleted=include_deleted)
        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        include_deleted: bool = False,
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If no visible entity has this id
        """
        return await self.get_by_or_raise(
            session, self._pk_attr(), id, include_deleted=include_deleted
        )

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
        *,
        include_deleted: bool = False,
    ) -> T | None:
        """Get entity by arbitrary attribute.

        Rows already in the identity map are refreshed from the result, so
        changes made by UPDATE statements or triggers are visible.

        Args:
            session: Database session
            attr: Model attribute to filter by (e.g., Game.hex_id)
            value: Value to match
            include_deleted: Also match soft-deleted rows

        Returns:
            First matching entity or None
        """
        stmt = select(self.model).where(attr == value)
        if not include_deleted:
            stmt = self.visible(stmt)
        stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        instance = result.scalars().first()

        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_by_or_raise(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
        *,
        include_deleted: bool = False,
    ) -> T:
        """Get entity by attribute or raise NotFoundError."""
        instance = await self.get_by(session, attr, value, include_deleted=include_deleted)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    attr.key: str(value),
                    "operation": "db.get_by_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {attr.key: value})
        return instance

    # ──────────────────────────────────────────────────────────────
    # Writes
    # ──────────────────────────────────────────────────────────────

    async def add(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values (like id),
        and refreshes to ensure instance is up-to-date.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.add: {self.model.__name__}(id={entity_id})")
        return instance

    async def apply_changes(
        self,
        session: AsyncSession,
        instance: T,
        values: Mapping[str, Any],
    ) -> T:
        """Apply ``values`` to a loaded entity and flush.

        ``None`` values are skipped, so absent fields keep their current
        value (COALESCE semantics).
        """
        changed = {key: value for key, value in values.items() if value is not None}
        for key, value in changed.items():
            setattr(instance, key, value)
        await session.flush()
        await session.refresh(instance)

        self._lazy.debug(
            lambda: f"db.update: {self.model.__name__}(id={getattr(instance, 'id', None)}) fields={sorted(changed)}"
        )
        return instance

    async def soft_delete_where(
        self,
        session: AsyncSession,
        *criteria: Any,
        identifier: dict[str, Any],
        extra_values: Mapping[str, Any] | None = None,
    ) -> None:
        """Set ``deleted_at`` on visible rows matching ``criteria``.

        Args:
            session: Database session
            *criteria: WHERE criteria identifying the row
            identifier: Key-value pairs reported in NotFoundError and logs
            extra_values: Additional columns to set (e.g. updated_at)

        Raises:
            NotFoundError: No visible row matched
        """
        now = utc_now()
        values = {"deleted_at": now, **dict(extra_values or {})}
        affected = await self._update_where(
            session, criteria, SoftDeleteFilter(self.model, "visible"), values
        )
        if affected == 0:
            raise NotFoundError(self.model.__name__, identifier)

        self._logger.info(
            "Entity soft-deleted",
            extra={"entity": self.model.__name__, **_stringify(identifier), "operation": "db.soft_delete"},
        )

    async def restore_where(
        self,
        session: AsyncSession,
        *criteria: Any,
        identifier: dict[str, Any],
        extra_values: Mapping[str, Any] | None = None,
    ) -> None:
        """Clear ``deleted_at`` on soft-deleted rows matching ``criteria``.

        Raises:
            NotFoundError: No soft-deleted row matched
        """
        values = {"deleted_at": None, **dict(extra_values or {})}
        affected = await self._update_where(
            session, criteria, SoftDeleteFilter(self.model, "deleted"), values
        )
        if affected == 0:
            raise NotFoundError(self.model.__name__, identifier)

        self._logger.info(
            "Entity restored",
            extra={"entity": self.model.__name__, **_stringify(identifier), "operation": "db.restore"},
        )

    async def _update_where(
        self,
        session: AsyncSession,
        criteria: tuple[Any, ...],
        visibility: SoftDeleteFilter,
        values: Mapping[str, Any],
    ) -> int:
        stmt = (
            update(self.model)
            .where(*criteria, visibility.criterion)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        affected = cast("Any", result).rowcount or 0

        self._lazy.debug(
            lambda: f"db.update_where: {self.model.__name__}[{visibility.state}] set={sorted(values)} -> {affected} rows"
        )
        return affected

    # ──────────────────────────────────────────────────────────────
    # Pagination
    # ──────────────────────────────────────────────────────────────

    async def paginate_keyset(
        self,
        session: AsyncSession,
        statement: Select[Any],
        keyset: KeysetFilter,
        *,
        current_cursor: str | None,
        next_cursor_fn: Callable[[T], str],
    ) -> PaginatedResponse[T]:
        """Execute a keyset-paginated query.

        Args:
            session: Database session
            statement: Select statement with visibility and scope filters applied
            keyset: Ordering, seek values and page size
            current_cursor: Cursor of the request, echoed back unchanged
            next_cursor_fn: Builds the next cursor from the last row of the page

        Returns:
            PaginatedResponse with at most ``keyset.limit`` rows

        Example:
            page = await repo.paginate_keyset(
                session,
                repo.visible(),
                KeysetFilter([(Game.created_at, "desc"), (Game.hex_id, "desc")], limit=25),
                current_cursor=None,
                next_cursor_fn=CursorCodec.game_cursor,
            )
        """
        from leaderboard_service.core.pagination.schemas import PaginatedResponse

        stmt = keyset.apply(statement).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        rows = list(result.scalars().all())

        page = PaginatedResponse.from_query_results(
            rows,
            requested_limit=keyset.limit,
            current_cursor=current_cursor,
            next_cursor_fn=next_cursor_fn,
        )

        self._lazy.debug(
            lambda: f"db.paginate_keyset: {self.model.__name__}(limit={keyset.limit}, seek={keyset.seek!r}) -> {page.total_returned} items, has_more={page.has_more}"
        )
        return page

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        """Primary key attribute (``id`` on every model here)."""
        attr = getattr(self.model, "id", None)
        if attr is None:
            raise AttributeError(f"{self.model.__name__} has no 'id' attribute")
        return cast("InstrumentedAttribute[Any]", attr)


def _stringify(identifier: Mapping[str, Any]) -> dict[str, str]:
    return {key: str(value) for key, value in identifier.items()}


__all__ = ["BaseRepository"]
