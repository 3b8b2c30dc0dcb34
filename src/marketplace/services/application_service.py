"""Project application service - submit and decide applications to partner on a project."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import (
    ApplicationsClosedError,
    DependencyFailureError,
    MarketplaceError,
    NotFoundError,
    UnauthorizedError,
)
from src.marketplace.core.logging import get_logger
from src.marketplace.models import (
    Decision,
    PartnershipType,
    ProjectApplication,
    RequestStatus,
    User,
)
from src.marketplace.models.base import touch
from src.marketplace.repositories import (
    OrganizationMemberRepository,
    ProjectApplicationRepository,
    ProjectRepository,
)
from src.marketplace.services.access import ensure_owner_or_admin
from src.marketplace.services.notification_service import NotificationService, project_link
from src.marketplace.services.partnership_service import PartnershipMaterializer
from src.marketplace.services.state_machine import (
    PROJECT_OPEN_STATUSES,
    REQUEST_TRANSITIONS,
    parse_decision,
    request_status_for,
)

logger = get_logger(__name__)


class ApplicationService:
    """Service for project application operations."""

    def __init__(
        self,
        application_repo: ProjectApplicationRepository,
        project_repo: ProjectRepository,
        member_repo: OrganizationMemberRepository,
        materializer: PartnershipMaterializer,
        notifier: NotificationService,
        session: AsyncSession,
    ):
        self.application_repo = application_repo
        self.project_repo = project_repo
        self.member_repo = member_repo
        self.materializer = materializer
        self.notifier = notifier
        self.session = session

    async def submit_application(
        self,
        project_id: UUID,
        actor: User,
        partnership_type: PartnershipType | str,
        message: str = "",
        organization_id: UUID | None = None,
    ) -> ProjectApplication:
        """Apply to partner on a project.

        The project must be published or in progress and accepting
        applications. Applying again while a previous application is pending
        is allowed and creates a second row.

        Raises:
            NotFoundError: Project does not exist
            ApplicationsClosedError: Project is not taking applications
            UnauthorizedError: Applying for an organization the actor is not in
        """
        partnership_type = PartnershipType(partnership_type)
        try:
            project = await self.project_repo.get_by_id(project_id)
            if project is None:
                raise NotFoundError("Project not found")

            if not project.applications_enabled:
                raise ApplicationsClosedError("This project is not accepting applications")
            if project.status_enum not in PROJECT_OPEN_STATUSES:
                raise ApplicationsClosedError(
                    f"Projects in status '{project.status}' do not accept applications"
                )

            if organization_id is not None and not await self.member_repo.is_member(
                organization_id, actor.id
            ):
                raise UnauthorizedError("You can only apply on behalf of your own organization")

            application = ProjectApplication(
                project_id=project_id,
                user_id=actor.id,
                organization_id=organization_id,
                partnership_type=partnership_type.value,
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
            logger.error("Failed to submit application", project_id=str(project_id), error=str(e))
            raise DependencyFailureError("Could not save application") from e

        logger.info(
            "Application submitted",
            application_id=str(application.id),
            project_id=str(project_id),
            applicant_id=str(actor.id),
            partnership_type=partnership_type.value,
        )
        return application

    async def decide_application(
        self,
        application_id: UUID,
        decision: Decision | str,
        actor: User,
    ) -> ProjectApplication:
        """Approve or reject a pending application.

        Only the project organizer or an admin may decide. Approval writes the
        Partnership row in the same transaction. Deciding an application that
        is no longer pending returns it unchanged.
        """
        decision = parse_decision(decision)
        try:
            application = await self.application_repo.get_by_id(application_id)
            if application is None:
                raise NotFoundError("Application not found")

            # Lock order is project, then application (same as project completion).
            project = await self.project_repo.get_for_update(application.project_id)
            if project is None:
                raise NotFoundError("Project not found")
            ensure_owner_or_admin(actor, project.organizer_id, "project")

            application = await self.application_repo.get_for_update(application_id)
            if application is None:
                raise NotFoundError("Application not found")

            if application.status != RequestStatus.PENDING.value:
                # Release the row lock without expiring the loaded instance.
                await self.session.commit()
                logger.info(
                    "Application already decided",
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

            if target == RequestStatus.APPROVED:
                await self.materializer.materialize(application)

            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to decide application",
                application_id=str(application_id),
                error=str(e),
            )
            raise DependencyFailureError("Could not save decision") from e

        logger.info(
            "Application decided",
            application_id=str(application_id),
            project_id=str(project.id),
            decision=target.value,
            decided_by=str(actor.id),
        )

        if target == RequestStatus.APPROVED:
            await self.notifier.notify(
                application.user_id,
                "Application Approved",
                f'Your application to partner on "{project.title}" has been approved.',
                link=project_link(project.id),
            )
        else:
            await self.notifier.notify(
                application.user_id,
                "Application Rejected",
                f'Your application to partner on "{project.title}" was not accepted.',
            )
        return application

    async def list_for_project(
        self,
        project_id: UUID,
        actor: User,
        status: RequestStatus | None = None,
    ) -> list[ProjectApplication]:
        """List a project's applications (organizer or admin only)."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        ensure_owner_or_admin(actor, project.organizer_id, "project")
        return await self.application_repo.list_for_project(project_id, status=status)

    async def list_for_user(self, actor: User) -> list[ProjectApplication]:
        """List the actor's own applications, newest first."""
        return await self.application_repo.list_for_user(actor.id)
