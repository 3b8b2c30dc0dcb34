"""Repositories for project applications, join requests and partnership applications."""

from uuid import UUID

from sqlmodel import select

from src.marketplace.models import (
    OrganizationJoinRequest,
    PartnershipApplication,
    ProjectApplication,
    RequestStatus,
)
from src.marketplace.repositories.base import BaseRepository


class ProjectApplicationRepository(BaseRepository[ProjectApplication]):
    """Repository for ProjectApplication entity."""

    model = ProjectApplication

    async def list_for_project(
        self, project_id: UUID, status: RequestStatus | None = None
    ) -> list[ProjectApplication]:
        """List applications to a project, newest first."""
        query = select(ProjectApplication).where(ProjectApplication.project_id == project_id)
        if status is not None:
            query = query.where(ProjectApplication.status == status.value)
        result = await self.session.execute(
            query.order_by(ProjectApplication.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_for_user(
        self, user_id: UUID, status: RequestStatus | None = None
    ) -> list[ProjectApplication]:
        """List a user's applications, newest first."""
        query = select(ProjectApplication).where(ProjectApplication.user_id == user_id)
        if status is not None:
            query = query.where(ProjectApplication.status == status.value)
        result = await self.session.execute(
            query.order_by(ProjectApplication.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_pending_for_update(self, project_id: UUID) -> list[ProjectApplication]:
        """Lock and return a project's pending applications."""
        result = await self.session.execute(
            select(ProjectApplication)
            .where(
                ProjectApplication.project_id == project_id,
                ProjectApplication.status == RequestStatus.PENDING.value,
            )
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())


class JoinRequestRepository(BaseRepository[OrganizationJoinRequest]):
    """Repository for OrganizationJoinRequest entity."""

    model = OrganizationJoinRequest

    async def list_for_organization(
        self, organization_id: UUID, status: RequestStatus | None = None
    ) -> list[OrganizationJoinRequest]:
        """List join requests for an organization, newest first."""
        query = select(OrganizationJoinRequest).where(
            OrganizationJoinRequest.organization_id == organization_id
        )
        if status is not None:
            query = query.where(OrganizationJoinRequest.status == status.value)
        result = await self.session.execute(
            query.order_by(OrganizationJoinRequest.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())


class PartnershipApplicationRepository(BaseRepository[PartnershipApplication]):
    """Repository for PartnershipApplication entity."""

    model = PartnershipApplication

    async def list_for_organization(
        self, organization_id: UUID, status: RequestStatus | None = None
    ) -> list[PartnershipApplication]:
        """List partnership applications to an organization, newest first."""
        query = select(PartnershipApplication).where(
            PartnershipApplication.organization_id == organization_id
        )
        if status is not None:
            query = query.where(PartnershipApplication.status == status.value)
        result = await self.session.execute(
            query.order_by(PartnershipApplication.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
