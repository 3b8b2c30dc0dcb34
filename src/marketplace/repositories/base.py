"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.marketplace.schemas.pagination import decode_cursor, encode_cursor


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, id: UUID) -> ModelType | None:
        """Get a record by primary key and lock its row until the transaction ends.

        Re-reads from the database even if the entity is already in the
        session, so check-then-act sequences see the committed status.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def flush(self) -> None:
        """Flush pending changes so generated values are visible in this transaction."""
        await self.session.flush()

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query.

        Args:
            query: The base SQLAlchemy query to paginate
            cursor: Cursor from the previous page, if any
            limit: Maximum number of items to return
            cursor_field: Timestamp column the cursor points into (created_at)

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                query = query.where(cursor_field < decode_cursor(cursor))
            except ValueError:
                # Unreadable cursor - start from the newest row
                pass

        query = query.order_by(cursor_field.desc())

        # Fetch limit + 1 to determine if there are more results
        query = query.limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            next_cursor = encode_cursor(getattr(items[-1], cursor_field.key))

        return items, next_cursor, has_more
