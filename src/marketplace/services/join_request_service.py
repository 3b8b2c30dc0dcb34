"""Organization join request service."""

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
    MemberRole,
    OrganizationJoinRequest,
    OrganizationStatus,
    RequestStatus,
    User,
)
from src.marketplace.models.base import touch
from src.marketplace.repositories import (
    JoinRequestRepository,
    OrganizationMemberRepository,
    OrganizationRepository,
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


class JoinRequestService:
    """Service for requests to join an organization."""

    def __init__(
        self,
        join_request_repo: JoinRequestRepository,
        organization_repo: OrganizationRepository,
        member_repo: OrganizationMemberRepository,
        notifier: NotificationService,
        session: AsyncSession,
    ):
        self.join_request_repo = join_request_repo
        self.organization_repo = organization_repo
        self.member_repo = member_repo
        self.notifier = notifier
        self.session = session

    async def submit_join_request(
        self,
        organization_id: UUID,
        actor: User,
        message: str = "",
    ) -> OrganizationJoinRequest:
        """Ask to become a member of an active organization."""
        try:
            organization = await self.organization_repo.get_by_id(organization_id)
            if organization is None:
                raise NotFoundError("Organization not found")
            if organization.status != OrganizationStatus.ACTIVE.value:
                raise ApplicationsClosedError(
                    "Only active organizations accept join requests"
                )

            join_request = OrganizationJoinRequest(
                organization_id=organization_id,
                user_id=actor.id,
                message=message,
                status=RequestStatus.PENDING.value,
            )
            self.join_request_repo.add(join_request)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to submit join request",
                organization_id=str(organization_id),
                error=str(e),
            )
            raise DependencyFailureError("Could not save join request") from e

        logger.info(
            "Join request submitted",
            join_request_id=str(join_request.id),
            organization_id=str(organization_id),
            user_id=str(actor.id),
        )
        return join_request

    async def decide_join_request(
        self,
        join_request_id: UUID,
        decision: Decision | str,
        actor: User,
    ) -> OrganizationJoinRequest:
        """Approve or reject a pending join request.

        Approval adds the requester as a member unless they already are one.
        """
        decision = parse_decision(decision)
        try:
            join_request = await self.join_request_repo.get_for_update(join_request_id)
            if join_request is None:
                raise NotFoundError("Join request not found")

            organization = await self.organization_repo.get_by_id(join_request.organization_id)
            if organization is None:
                raise NotFoundError("Organization not found")
            ensure_owner_or_admin(actor, organization.owner_id, "organization")

            if join_request.status != RequestStatus.PENDING.value:
                await self.session.commit()
                logger.info(
                    "Join request already decided",
                    join_request_id=str(join_request_id),
                    status=join_request.status,
                )
                return join_request

            target = REQUEST_TRANSITIONS.ensure(
                join_request.status, request_status_for(decision)
            )
            join_request.status = target.value
            join_request.decided_by_user_id = actor.id
            join_request.decided_at = touch(join_request)

            if target == RequestStatus.APPROVED and not await self.member_repo.is_member(
                organization.id, join_request.user_id
            ):
                self.member_repo.create_membership(
                    organization.id, join_request.user_id, MemberRole.MEMBER
                )

            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to decide join request",
                join_request_id=str(join_request_id),
                error=str(e),
            )
            raise DependencyFailureError("Could not save decision") from e

        logger.info(
            "Join request decided",
            join_request_id=str(join_request_id),
            organization_id=str(organization.id),
            decision=target.value,
            decided_by=str(actor.id),
        )

        if target == RequestStatus.APPROVED:
            await self.notifier.notify(
                join_request.user_id,
                "Join Request Approved",
                f'You are now a member of "{organization.name}".',
                link=organization_link(organization.id),
            )
        else:
            await self.notifier.notify(
                join_request.user_id,
                "Join Request Rejected",
                f'Your request to join "{organization.name}" was not accepted.',
            )
        return join_request

    async def list_for_organization(
        self,
        organization_id: UUID,
        actor: User,
        status: RequestStatus | None = None,
    ) -> list[OrganizationJoinRequest]:
        """List join requests for an organization (owner or admin only)."""
        organization = await self.organization_repo.get_by_id(organization_id)
        if organization is None:
            raise NotFoundError("Organization not found")
        ensure_owner_or_admin(actor, organization.owner_id, "organization")
        return await self.join_request_repo.list_for_organization(organization_id, status=status)
