"""Repository for Project entity."""

from uuid import UUID

from sqlmodel import select

from src.marketplace.models import Project, ProjectStatus
from src.marketplace.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Project]:
        """Get projects by id, keyed by id. Unknown ids are absent from the result."""
        if not ids:
            return {}
        result = await self.session.execute(
            select(Project).where(Project.id.in_(ids))  # type: ignore[attr-defined]
        )
        return {project.id: project for project in result.scalars().all()}

    async def list_by_status(self, status: ProjectStatus) -> list[Project]:
        """List projects in a status, newest first."""
        result = await self.session.execute(
            select(Project)
            .where(Project.status == status.value)
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_by_organizer(
        self,
        organizer_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List projects owned by a user with cursor-based pagination."""
        query = select(Project).where(Project.organizer_id == organizer_id)
        return await self.paginate(query, cursor, limit, Project.created_at)
