"""Repository for User entity."""

from uuid import UUID

from sqlmodel import select

from src.marketplace.models import User
from src.marketplace.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def get_many(self, ids: list[UUID]) -> dict[UUID, User]:
        """Get users by id, keyed by id. Unknown ids are absent from the result."""
        if not ids:
            return {}
        result = await self.session.execute(
            select(User).where(User.id.in_(ids))  # type: ignore[attr-defined]
        )
        return {user.id: user for user in result.scalars().all()}
