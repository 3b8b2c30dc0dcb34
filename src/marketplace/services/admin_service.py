"""Admin service - the queue of entities waiting for an admin decision."""

from src.marketplace.core.logging import get_logger
from src.marketplace.models import (
    Organization,
    OrganizationStatus,
    Project,
    ProjectStatus,
    User,
)
from src.marketplace.repositories import OrganizationRepository, ProjectRepository
from src.marketplace.services.access import ensure_admin

logger = get_logger(__name__)


class AdminService:
    """Service for platform admin views."""

    def __init__(
        self,
        organization_repo: OrganizationRepository,
        project_repo: ProjectRepository,
    ):
        self.organization_repo = organization_repo
        self.project_repo = project_repo

    async def pending_approvals_for_admin(
        self, actor: User
    ) -> tuple[list[Organization], list[Project]]:
        """Organizations awaiting approval and projects awaiting publication, newest first."""
        ensure_admin(actor)
        organizations = await self.organization_repo.list_by_status(
            OrganizationStatus.PENDING_APPROVAL
        )
        projects = await self.project_repo.list_by_status(ProjectStatus.PENDING_PUBLISH)
        logger.debug(
            "Pending approvals listed",
            organizations=len(organizations),
            projects=len(projects),
        )
        return organizations, projects
