"""Project service - creation, publication review and the project lifecycle."""

import contextlib
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.exceptions import (
    DependencyFailureError,
    InvalidTransitionError,
    MarketplaceError,
    NotFoundError,
    UnauthorizedError,
)
from src.marketplace.core.logging import get_logger
from src.marketplace.models import (
    Decision,
    PartnershipType,
    Project,
    ProjectStatus,
    RequestStatus,
    User,
)
from src.marketplace.models.base import touch
from src.marketplace.repositories import (
    OrganizationMemberRepository,
    OrganizationRepository,
    ProjectApplicationRepository,
    ProjectRepository,
)
from src.marketplace.services.access import ensure_admin, ensure_owner_or_admin
from src.marketplace.services.notification_service import (
    NotificationService,
    project_edit_link,
    project_link,
)
from src.marketplace.services.partnership_service import PartnershipViewService
from src.marketplace.services.policy_service import Policy
from src.marketplace.services.state_machine import (
    PROJECT_TRANSITIONS,
    REQUEST_TRANSITIONS,
    parse_decision,
)

logger = get_logger(__name__)


class ProjectService:
    """Service for project operations."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        organization_repo: OrganizationRepository,
        member_repo: OrganizationMemberRepository,
        application_repo: ProjectApplicationRepository,
        partnership_views: PartnershipViewService,
        notifier: NotificationService,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.organization_repo = organization_repo
        self.member_repo = member_repo
        self.application_repo = application_repo
        self.partnership_views = partnership_views
        self.notifier = notifier
        self.session = session

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def list_my_projects(
        self, actor: User, cursor: str | None = None, limit: int = 50
    ) -> tuple[list[Project], str | None, bool]:
        return await self.project_repo.list_by_organizer(actor.id, cursor=cursor, limit=limit)

    async def create_project(
        self,
        actor: User,
        title: str,
        policy: Policy,
        description: str | None = None,
        organization_id: UUID | None = None,
        partnership_types_sought: list[PartnershipType] | None = None,
        publish: bool = False,
    ) -> Project:
        """Create a draft project, optionally submitting it for publication.

        Raises:
            NotFoundError: organization_id does not exist
            UnauthorizedError: Actor is not a member of that organization
        """
        try:
            if organization_id is not None:
                if await self.organization_repo.get_by_id(organization_id) is None:
                    raise NotFoundError("Organization not found")
                if not await self.member_repo.is_member(organization_id, actor.id):
                    raise UnauthorizedError(
                        "Projects can only be created for organizations you belong to"
                    )

            project = Project(
                organizer_id=actor.id,
                organization_id=organization_id,
                title=title,
                description=description,
                status=ProjectStatus.DRAFT.value,
                partnership_types_sought=[
                    PartnershipType(t).value for t in partnership_types_sought or []
                ],
            )
            if publish:
                project.status = PROJECT_TRANSITIONS.ensure(
                    project.status, policy.project_publish_status()
                ).value
            self.project_repo.add(project)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to create project", error=str(e))
            raise DependencyFailureError("Could not save project") from e

        logger.info(
            "Project created",
            project_id=str(project.id),
            organizer_id=str(actor.id),
            status=project.status,
        )
        return project

    async def submit_project_for_publish(
        self, project_id: UUID, actor: User, policy: Policy
    ) -> Project:
        """Move a draft towards publication.

        With require_project_approval the project waits for an admin in
        pending_publish; otherwise it is published immediately.
        """
        try:
            project = await self._get_for_update(project_id)
            if project.organizer_id != actor.id:
                raise UnauthorizedError("Only the project organizer can submit it for publication")

            target = PROJECT_TRANSITIONS.ensure(project.status, policy.project_publish_status())
            project.status = target.value
            touch(project)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to submit project", project_id=str(project_id), error=str(e))
            raise DependencyFailureError("Could not save project") from e

        logger.info(
            "Project submitted for publication", project_id=str(project_id), status=target.value
        )
        return project

    async def decide_project_publish(
        self,
        project_id: UUID,
        decision: Decision | str,
        actor: User,
    ) -> Project:
        """Admin review of a project waiting in pending_publish.

        Approval publishes; rejection sends the project back to draft. A
        project that is already published is returned unchanged.
        """
        decision = parse_decision(decision)
        ensure_admin(actor)
        try:
            project = await self._get_for_update(project_id)

            if project.status == ProjectStatus.PUBLISHED.value:
                await self.session.commit()
                logger.info("Project already published", project_id=str(project_id))
                return project
            if project.status != ProjectStatus.PENDING_PUBLISH.value:
                raise InvalidTransitionError(
                    f"Project in status '{project.status}' is not awaiting publication review"
                )

            target = PROJECT_TRANSITIONS.ensure(
                project.status,
                ProjectStatus.PUBLISHED if decision == Decision.APPROVED else ProjectStatus.DRAFT,
            )
            project.status = target.value
            touch(project)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to decide project publication",
                project_id=str(project_id),
                error=str(e),
            )
            raise DependencyFailureError("Could not save decision") from e

        logger.info(
            "Project publication decided",
            project_id=str(project_id),
            decision=decision.value,
            status=target.value,
            decided_by=str(actor.id),
        )

        if target == ProjectStatus.PUBLISHED:
            await self.notifier.notify(
                project.organizer_id,
                "Project Published",
                f'Your project "{project.title}" is now published.',
                link=project_link(project.id),
            )
        else:
            await self.notifier.notify(
                project.organizer_id,
                "Project Publication Rejected",
                f'Your project "{project.title}" was not approved for publication '
                "and has been returned to draft.",
                link=project_edit_link(project.id),
            )
        return project

    async def start_project(self, project_id: UUID, actor: User) -> Project:
        """Mark a published project as in progress."""
        return await self._move(project_id, actor, ProjectStatus.IN_PROGRESS)

    async def complete_project(self, project_id: UUID, actor: User) -> Project:
        """Complete a project.

        Pending applications are rejected in the same transaction. Every
        partner is notified once the completion is committed.
        """
        project = await self._move(project_id, actor, ProjectStatus.COMPLETED)

        try:
            partners = await self.partnership_views.partners_for_project(project_id)
        except SQLAlchemyError as e:
            logger.warning(
                "Could not load partners to notify of completion",
                project_id=str(project_id),
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return project

        await self.notifier.notify_many(
            [view.partner_id for view in partners],
            "Project Completed",
            f'The project "{project.title}" has been completed. Thank you for partnering!',
            link=project_link(project.id),
        )
        return project

    async def set_applications_enabled(
        self, project_id: UUID, actor: User, enabled: bool
    ) -> Project:
        """Open or close a project for new applications."""
        try:
            project = await self._get_for_update(project_id)
            ensure_owner_or_admin(actor, project.organizer_id, "project")
            project.applications_enabled = enabled
            touch(project)
            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to update project", project_id=str(project_id), error=str(e))
            raise DependencyFailureError("Could not save project") from e

        logger.info(
            "Project applications toggled", project_id=str(project_id), enabled=enabled
        )
        return project

    async def _get_for_update(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_for_update(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def _move(self, project_id: UUID, actor: User, target: ProjectStatus) -> Project:
        """Owner-driven transition (organizer or admin)."""
        rejected = 0
        try:
            project = await self._get_for_update(project_id)
            ensure_owner_or_admin(actor, project.organizer_id, "project")

            previous = project.status
            project.status = PROJECT_TRANSITIONS.ensure(project.status, target).value
            now = touch(project)

            if target == ProjectStatus.COMPLETED:
                project.completed_at = now
                for application in await self.application_repo.list_pending_for_update(
                    project_id
                ):
                    application.status = REQUEST_TRANSITIONS.ensure(
                        application.status, RequestStatus.REJECTED
                    ).value
                    application.decided_by_user_id = actor.id
                    application.decided_at = now
                    application.updated_at = now
                    rejected += 1

            await self.session.commit()

        except MarketplaceError:
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to change project status",
                project_id=str(project_id),
                target=target.value,
                error=str(e),
            )
            raise DependencyFailureError("Could not save project") from e

        logger.info(
            "Project status changed",
            project_id=str(project_id),
            from_status=previous,
            to_status=project.status,
            changed_by=str(actor.id),
            auto_rejected_applications=rejected,
        )
        return project
