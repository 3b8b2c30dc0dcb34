"""Partnership materialization and the reconciled partnership read model."""

from collections.abc import Callable
from uuid import UUID

from src.marketplace.core.exceptions import NotFoundError
from src.marketplace.core.logging import get_logger
from src.marketplace.models import (
    Partnership,
    PartnershipStatus,
    Project,
    ProjectApplication,
    ProjectStatus,
    RequestStatus,
)
from src.marketplace.models.base import touch
from src.marketplace.repositories import (
    PartnershipRepository,
    ProjectApplicationRepository,
    ProjectRepository,
)
from src.marketplace.schemas.partnership import PartnershipView

logger = get_logger(__name__)

# Application status -> partnership status for views synthesized from applications.
APPLICATION_VIEW_STATUS = {
    RequestStatus.PENDING.value: PartnershipStatus.PENDING.value,
    RequestStatus.APPROVED.value: PartnershipStatus.ACTIVE.value,
}


class PartnershipMaterializer:
    """Turns an approved application into exactly one active Partnership row.

    Runs inside the caller's transaction: it flushes but never commits.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        partnership_repo: PartnershipRepository,
    ):
        self.project_repo = project_repo
        self.partnership_repo = partnership_repo

    async def materialize(self, application: ProjectApplication) -> Partnership:
        """Insert or re-activate the partnership for (project, applicant).

        The project row is locked first, so two materializations for the same
        project run one after the other and the second one finds the row the
        first one wrote.
        """
        project = await self.project_repo.get_for_update(application.project_id)
        if project is None:
            raise NotFoundError("Project not found")

        existing = await self.partnership_repo.get_by_project_and_partner(
            application.project_id, application.user_id, for_update=True
        )
        if existing is not None:
            if existing.status != PartnershipStatus.ACTIVE.value:
                existing.status = PartnershipStatus.ACTIVE.value
                touch(existing)
                await self.partnership_repo.flush()
                logger.info(
                    "Partnership reactivated",
                    partnership_id=str(existing.id),
                    project_id=str(application.project_id),
                )
            return existing

        partnership = Partnership(
            project_id=application.project_id,
            partner_id=application.user_id,
            organization_id=application.organization_id,
            partnership_type=application.partnership_type,
            status=PartnershipStatus.ACTIVE.value,
        )
        self.partnership_repo.add(partnership)
        await self.partnership_repo.flush()

        logger.info(
            "Partnership materialized",
            partnership_id=str(partnership.id),
            project_id=str(application.project_id),
            partner_id=str(application.user_id),
            application_id=str(application.id),
        )
        return partnership


def _view_from_partnership(partnership: Partnership) -> PartnershipView:
    return PartnershipView(
        id=partnership.id,
        project_id=partnership.project_id,
        partner_id=partnership.partner_id,
        organization_id=partnership.organization_id,
        partnership_type=partnership.partnership_type,
        status=partnership.status,
        source="partnership",
        created_at=partnership.created_at,
    )


def _view_from_application(application: ProjectApplication) -> PartnershipView:
    return PartnershipView(
        id=application.id,
        project_id=application.project_id,
        partner_id=application.user_id,
        organization_id=application.organization_id,
        partnership_type=application.partnership_type,
        status=APPLICATION_VIEW_STATUS.get(application.status, application.status),
        source="application",
        created_at=application.created_at,
    )


def _merge(
    candidates: list[PartnershipView],
    key: Callable[[PartnershipView], UUID],
    projects: dict[UUID, Project],
) -> list[PartnershipView]:
    views: list[PartnershipView] = []
    seen: set[UUID] = set()
    for view in candidates:
        if key(view) in seen:
            continue
        seen.add(key(view))

        project = projects.get(view.project_id)
        if project is not None:
            view.project_title = project.title
            view.project_status = project.status
            if project.status == ProjectStatus.COMPLETED.value:
                view.status = PartnershipStatus.COMPLETED.value
        views.append(view)
    return views


def _candidates(
    partnerships: list[Partnership], applications: list[ProjectApplication]
) -> list[PartnershipView]:
    return [_view_from_partnership(p) for p in partnerships] + [
        _view_from_application(a)
        for a in applications
        if a.status == RequestStatus.APPROVED.value
    ]


def reconcile(
    partnerships: list[Partnership],
    applications: list[ProjectApplication],
    projects: dict[UUID, Project],
) -> list[PartnershipView]:
    """Merge partnership rows and approved applications into one view per project.

    Both inputs are expected newest-first. Partnership rows come first and win
    over applications for the same project; within each source the first row
    per project wins. Entries for completed projects report status completed.
    """
    return _merge(
        _candidates(partnerships, applications), lambda view: view.project_id, projects
    )


class PartnershipViewService:
    """Read-only service answering "what am I partnered on?"."""

    def __init__(
        self,
        partnership_repo: PartnershipRepository,
        application_repo: ProjectApplicationRepository,
        project_repo: ProjectRepository,
    ):
        self.partnership_repo = partnership_repo
        self.application_repo = application_repo
        self.project_repo = project_repo

    async def partnerships_for(self, user_id: UUID) -> list[PartnershipView]:
        """Reconciled partnerships of a user, at most one per project.

        Covers approvals whose Partnership row has not been written yet.
        """
        partnerships = await self.partnership_repo.list_for_partner(user_id)
        applications = await self.application_repo.list_for_user(
            user_id, status=RequestStatus.APPROVED
        )
        project_ids = list(
            dict.fromkeys(
                [p.project_id for p in partnerships] + [a.project_id for a in applications]
            )
        )
        projects = await self.project_repo.get_many(project_ids)
        return reconcile(partnerships, applications, projects)

    async def partners_for_project(self, project_id: UUID) -> list[PartnershipView]:
        """Reconciled partners of a project, at most one per partner."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        partnerships = await self.partnership_repo.list_for_project(project_id)
        applications = await self.application_repo.list_for_project(
            project_id, status=RequestStatus.APPROVED
        )
        return _merge(
            _candidates(partnerships, applications),
            lambda view: view.partner_id,
            {project_id: project},
        )
