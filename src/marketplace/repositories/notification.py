"""Repository for Notification entity."""

from uuid import UUID

from sqlmodel import select, update

from src.marketplace.models import Notification
from src.marketplace.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification entity."""

    model = Notification

    async def list_for_user(
        self,
        user_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
        unread_only: bool = False,
    ) -> tuple[list[Notification], str | None, bool]:
        """List a user's notifications, newest first, with cursor-based pagination."""
        query = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.read == False)  # noqa: E712
        return await self.paginate(query, cursor, limit, Notification.created_at)

    async def mark_all_read(self, user_id: UUID) -> int:
        """Mark every unread notification of a user as read. Returns rows changed."""
        result = await self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id)  # type: ignore[arg-type]
            .where(Notification.read == False)  # type: ignore[arg-type]  # noqa: E712
            .values(read=True)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
