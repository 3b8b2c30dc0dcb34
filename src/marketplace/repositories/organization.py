"""Repositories for Organization, OrganizationMember and PartnershipInterest."""

from uuid import UUID

from sqlmodel import select

from src.marketplace.models import (
    MemberRole,
    Organization,
    OrganizationMember,
    OrganizationStatus,
    PartnershipInterest,
)
from src.marketplace.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    """Repository for Organization entity."""

    model = Organization

    async def list_by_status(self, status: OrganizationStatus) -> list[Organization]:
        """List organizations in a status, newest first."""
        result = await self.session.execute(
            select(Organization)
            .where(Organization.status == status.value)
            .order_by(Organization.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())


class OrganizationMemberRepository(BaseRepository[OrganizationMember]):
    """Repository for user-organization memberships."""

    model = OrganizationMember

    async def get_membership(
        self, organization_id: UUID, user_id: UUID
    ) -> OrganizationMember | None:
        """Get membership for a user in an organization."""
        result = await self.session.execute(
            select(OrganizationMember).where(
                OrganizationMember.organization_id == organization_id,
                OrganizationMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def is_member(self, organization_id: UUID, user_id: UUID) -> bool:
        """Check if user belongs to the organization (any role)."""
        membership = await self.get_membership(organization_id, user_id)
        return membership is not None

    def create_membership(
        self,
        organization_id: UUID,
        user_id: UUID,
        role: MemberRole = MemberRole.MEMBER,
    ) -> OrganizationMember:
        """Create a new membership (add to session, no commit)."""
        membership = OrganizationMember(
            organization_id=organization_id,
            user_id=user_id,
            role=role.value,
        )
        self.session.add(membership)
        return membership


class PartnershipInterestRepository(BaseRepository[PartnershipInterest]):
    """Repository for organization partnership interests."""

    model = PartnershipInterest

    async def list_for_organization(
        self, organization_id: UUID, open_only: bool = False
    ) -> list[PartnershipInterest]:
        """List an organization's interests, newest first."""
        query = select(PartnershipInterest).where(
            PartnershipInterest.organization_id == organization_id
        )
        if open_only:
            query = query.where(PartnershipInterest.is_open == True)  # noqa: E712
        result = await self.session.execute(
            query.order_by(PartnershipInterest.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
