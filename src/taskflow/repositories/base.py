"""Base repository with common CRUD operations."""

from typing import Any
from uuid import UUID

from sqlalchemy import tuple_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.taskflow.schemas.pagination import CursorPosition, decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit,
    rollback) belongs to the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID, for_update: bool = False) -> ModelType | None:
        """Get a record by its primary key, optionally locking the row."""
        query = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)

    async def paginate(
        self,
        query: Any,  # SelectOfScalar - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Keyset pagination on ``(cursor_field, id)``, newest first.

        Args:
            query: The base query to paginate
            cursor: Optional cursor from the previous page
            limit: Maximum number of items to return
            cursor_field: Timestamp column to order by; ``id`` breaks ties

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        id_field = self.model.id  # type: ignore[attr-defined]
        if cursor:
            try:
                position = decode_cursor(cursor)
            except ValueError:
                # Unreadable cursor: serve the first page
                position = None
            if position is not None:
                query = query.where(tuple_(cursor_field, id_field) < tuple_(*position))

        query = query.order_by(cursor_field.desc(), id_field.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            last = items[-1]
            next_cursor = encode_cursor(
                CursorPosition(getattr(last, cursor_field.key), last.id)  # type: ignore[attr-defined]
            )

        return items, next_cursor, has_more
