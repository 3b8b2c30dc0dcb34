"""Repository for Partnership entity."""

from uuid import UUID

from sqlmodel import select

from src.marketplace.models import Partnership
from src.marketplace.repositories.base import BaseRepository


class PartnershipRepository(BaseRepository[Partnership]):
    """Repository for Partnership entity."""

    model = Partnership

    async def get_by_project_and_partner(
        self, project_id: UUID, partner_id: UUID, for_update: bool = False
    ) -> Partnership | None:
        """Get the partnership for a (project, partner) pair.

        If older writes left duplicates, the newest row is returned.
        """
        query = (
            select(Partnership)
            .where(
                Partnership.project_id == project_id,
                Partnership.partner_id == partner_id,
            )
            .order_by(Partnership.created_at.desc())  # type: ignore[attr-defined]
        )
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list_for_partner(self, partner_id: UUID) -> list[Partnership]:
        """List a user's partnerships, newest first."""
        result = await self.session.execute(
            select(Partnership)
            .where(Partnership.partner_id == partner_id)
            .order_by(Partnership.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_for_project(self, project_id: UUID) -> list[Partnership]:
        """List a project's partnerships, newest first."""
        result = await self.session.execute(
            select(Partnership)
            .where(Partnership.project_id == project_id)
            .order_by(Partnership.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
