"""Organization service - creation under policy and admin approval."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import (
    DependencyFailureError,
    MarketplaceError,
    NotFoundError,
)
from src.marketplace.core.logging import get_logger
from src.marketplace.models import (
    Decision,
    MemberRole,
    Organization,
    OrganizationStatus,
    User,
)
from src.marketplace.models.base import touch
from src.marketplace.repositories import (
    OrganizationMemberRepository,
    OrganizationRepository,
)
from src.marketplace.services.access import ensure_admin
from src.marketplace.services.notification_service import (
    NotificationService,
    organization_link,
)
from src.marketplace.services.policy_service import Policy
from src.marketplace.services.state_machine import ORGANIZATION_TRANSITIONS, parse_decision

logger = get_logger(__name__)


class OrganizationService:
    """Service for organization operations."""

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        member_repo: OrganizationMemberRepository,
        notifier: NotificationService,
        session: AsyncSession,
    ):
        self.organization_repo = organization_repo
        self.member_repo = member_repo
        self.notifier = notifier
        self.session = session

    async def get_organization(self, organization_id: UUID) -> Organization:
        organization = await self.organization_repo.get_by_id(organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")
        return organization

    async def create_organization(
        self,
        actor: User,
        name: str,
        policy: Policy,
        description: str | None = None,
    ) -> Organization:
        """Create an organization owned by the actor.

        The initial status comes from the policy snapshot and is not
        revisited when the setting changes later.
        """
        try:
            organization = Organization(
                owner_id=actor.id,
                name=name,
                description=description,
                status=policy.initial_organization_status().value,
            )
            self.organization_repo.add(organization)
            await self.organization_repo.flush()

            self.member_repo.create_membership(organization.id, actor.id, MemberRole.OWNER)
            await self.session.commit()

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create organization", error=str(e))
            raise DependencyFailureError("Could not save organization") from e

        logger.info(
            "Organization created",
            organization_id=str(organization.id),
            owner_id=str(actor.id),
            status=organization.status,
        )
        return organization

    async def decide_organization_approval(
        self,
        organization_id: UUID,
        decision: Decision | str,
        actor: User,
    ) -> Organization:
        """Admin decision on a pending organization.

        An organization that is already active or rejected is returned unchanged.
        """
        decision = parse_decision(decision)
        ensure_admin(actor)
        try:
            organization = await self.organization_repo.get_for_update(organization_id)
            if organization is None:
                raise NotFoundError("Organization not found")

            if organization.status != OrganizationStatus.PENDING_APPROVAL.value:
                await self.session.commit()
                logger.info(
                    "Organization already decided",
                    organization_id=str(organization_id),
                    status=organization.status,
                )
                return organization

            target = ORGANIZATION_TRANSITIONS.ensure(
                organization.status,
                OrganizationStatus.ACTIVE
                if decision == Decision.APPROVED
                else OrganizationStatus.REJECTED,
            )
            organization.status = target.value
            touch(organization)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to decide organization",
                organization_id=str(organization_id),
                error=str(e),
            )
            raise DependencyFailureError("Could not save decision") from e

        logger.info(
            "Organization decided",
            organization_id=str(organization_id),
            status=target.value,
            decided_by=str(actor.id),
        )

        if target == OrganizationStatus.ACTIVE:
            await self.notifier.notify(
                organization.owner_id,
                "Organization Approved",
                f'Your organization "{organization.name}" has been approved.',
                link=organization_link(organization.id),
            )
        else:
            await self.notifier.notify(
                organization.owner_id,
                "Organization Rejected",
                f'Your organization "{organization.name}" was not approved.',
            )
        return organization
