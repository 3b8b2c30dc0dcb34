"""Partnership interests and the applications made against them."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import (
    ApplicationsClosedError,
    DependencyFailureError,
    MarketplaceError,
    NotFoundError,
)
from src.marketplace.core.logging import get_logger
from src.marketplace.models import (
    Decision,
    Organization,
    OrganizationStatus,
    PartnershipApplication,
    PartnershipInterest,
    PartnershipType,
    RequestStatus,
    User,
)
from src.marketplace.models.base import touch
from src.marketplace.repositories import (
    OrganizationRepository,
    PartnershipApplicationRepository,
    PartnershipInterestRepository,
    ProjectRepository,
)
from src.marketplace.services.access import ensure_owner_or_admin
from src.marketplace.services.notification_service import (
    NotificationService,
    organization_link,
)
from src.marketplace.services.state_machine import (
    REQUEST_TRANSITIONS,
    parse_decision,
    request_status_for,
)

logger = get_logger(__name__)


async def _get_organization(
    organization_repo: OrganizationRepository, organization_id: UUID
) -> Organization:
    organization = await organization_repo.get_by_id(organization_id)
    if organization is None:
        raise NotFoundError("Organization not found")
    return organization


class PartnershipInterestService:
    """Service for an organization's open calls for partners."""

    def __init__(
        self,
        interest_repo: PartnershipInterestRepository,
        organization_repo: OrganizationRepository,
        session: AsyncSession,
    ):
        self.interest_repo = interest_repo
        self.organization_repo = organization_repo
        self.session = session

    async def create_interest(
        self,
        organization_id: UUID,
        actor: User,
        partnership_type: PartnershipType | str,
        description: str,
    ) -> PartnershipInterest:
        """Publish a partnership interest (organization owner or admin)."""
        partnership_type = PartnershipType(partnership_type)
        try:
            organization = await _get_organization(self.organization_repo, organization_id)
            ensure_owner_or_admin(actor, organization.owner_id, "organization")

            interest = PartnershipInterest(
                organization_id=organization_id,
                partnership_type=partnership_type.value,
                description=description,
                is_open=True,
            )
            self.interest_repo.add(interest)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to create interest", organization_id=str(organization_id), error=str(e)
            )
            raise DependencyFailureError("Could not save partnership interest") from e

        logger.info(
            "Partnership interest created",
            interest_id=str(interest.id),
            organization_id=str(organization_id),
            partnership_type=partnership_type.value,
        )
        return interest

    async def close_interest(self, interest_id: UUID, actor: User) -> PartnershipInterest:
        """Stop accepting applications against an interest. Closing twice is a no-op."""
        try:
            interest = await self.interest_repo.get_for_update(interest_id)
            if interest is None:
                raise NotFoundError("Partnership interest not found")
            organization = await _get_organization(
                self.organization_repo, interest.organization_id
            )
            ensure_owner_or_admin(actor, organization.owner_id, "organization")

            interest.is_open = False
            touch(interest)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to close interest", interest_id=str(interest_id), error=str(e))
            raise DependencyFailureError("Could not close partnership interest") from e

        logger.info("Partnership interest closed", interest_id=str(interest_id))
        return interest

    async def list_for_organization(
        self, organization_id: UUID, open_only: bool = False
    ) -> list[PartnershipInterest]:
        await _get_organization(self.organization_repo, organization_id)
        return await self.interest_repo.list_for_organization(organization_id, open_only=open_only)


class PartnershipApplicationService:
    """Service for applications against partnership interests."""

    def __init__(
        self,
        application_repo: PartnershipApplicationRepository,
        interest_repo: PartnershipInterestRepository,
        organization_repo: OrganizationRepository,
        project_repo: ProjectRepository,
        notifier: NotificationService,
        session: AsyncSession,
    ):
        self.application_repo = application_repo
        self.interest_repo = interest_repo
        self.organization_repo = organization_repo
        self.project_repo = project_repo
        self.notifier = notifier
        self.session = session

    async def submit_partnership_application(
        self,
        organization_id: UUID,
        interest_id: UUID,
        actor: User,
        message: str = "",
        project_id: UUID | None = None,
    ) -> PartnershipApplication:
        """Apply against an open interest of an active organization.

        The application takes the interest's partnership type.
        """
        try:
            interest = await self.interest_repo.get_by_id(interest_id)
            if interest is None or interest.organization_id != organization_id:
                raise NotFoundError("Partnership interest not found")

            organization = await _get_organization(self.organization_repo, organization_id)
            if organization.status != OrganizationStatus.ACTIVE.value:
                raise ApplicationsClosedError("Only active organizations accept applications")
            if not interest.is_open:
                raise ApplicationsClosedError("This partnership interest is closed")

            if project_id is not None and await self.project_repo.get_by_id(project_id) is None:
                raise NotFoundError("Project not found")

            application = PartnershipApplication(
                organization_id=organization_id,
                interest_id=interest_id,
                user_id=actor.id,
                partnership_type=interest.partnership_type,
                project_id=project_id,
                message=message,
                status=RequestStatus.PENDING.value,
            )
            self.application_repo.add(application)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to submit partnership application",
                interest_id=str(interest_id),
                error=str(e),
            )
            raise DependencyFailureError("Could not save partnership application") from e

        logger.info(
            "Partnership application submitted",
            application_id=str(application.id),
            organization_id=str(organization_id),
            interest_id=str(interest_id),
            applicant_id=str(actor.id),
        )
        return application

    async def decide_partnership_application(
        self,
        application_id: UUID,
        decision: Decision | str,
        actor: User,
    ) -> PartnershipApplication:
        """Approve or reject a pending partnership application.

        Only the applicant is affected: no partnership or membership is written.
        """
        decision = parse_decision(decision)
        try:
            application = await self.application_repo.get_for_update(application_id)
            if application is None:
                raise NotFoundError("Partnership application not found")

            organization = await _get_organization(
                self.organization_repo, application.organization_id
            )
            ensure_owner_or_admin(actor, organization.owner_id, "organization")

            if application.status != RequestStatus.PENDING.value:
                await self.session.commit()
                logger.info(
                    "Partnership application already decided",
                    application_id=str(application_id),
                    status=application.status,
                )
                return application

            target = REQUEST_TRANSITIONS.ensure(
                application.status, request_status_for(decision)
            )
            application.status = target.value
            application.decided_by_user_id = actor.id
            application.decided_at = touch(application)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to decide partnership application",
                application_id=str(application_id),
                error=str(e),
            )
            raise DependencyFailureError("Could not save decision") from e

        logger.info(
            "Partnership application decided",
            application_id=str(application_id),
            organization_id=str(organization.id),
            decision=target.value,
            decided_by=str(actor.id),
        )

        if target == RequestStatus.APPROVED:
            await self.notifier.notify(
                application.user_id,
                "Partnership Application Approved",
                f'"{organization.name}" accepted your partnership application.',
                link=organization_link(organization.id),
            )
        else:
            await self.notifier.notify(
                application.user_id,
                "Partnership Application Rejected",
                f'"{organization.name}" did not accept your partnership application.',
            )
        return application

    async def list_for_organization(
        self,
        organization_id: UUID,
        actor: User,
        status: RequestStatus | None = None,
    ) -> list[PartnershipApplication]:
        """List partnership applications to an organization (owner or admin only)."""
        organization = await _get_organization(self.organization_repo, organization_id)
        ensure_owner_or_admin(actor, organization.owner_id, "organization")
        return await self.application_repo.list_for_organization(organization_id, status=status)
