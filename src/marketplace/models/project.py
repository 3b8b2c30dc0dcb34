"""Project model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """A project that users can apply to partner on.

    completed_at is set iff status is completed.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    organizer_id: UUID = Field(foreign_key="users.id", index=True)
    organization_id: UUID | None = Field(
        default=None, foreign_key="organizations.id", index=True
    )
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: str = Field(default=ProjectStatus.DRAFT.value, max_length=20, index=True)
    applications_enabled: bool = Field(default=True)
    completed_at: datetime | None = Field(default=None)
    partnership_types_sought: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)

    @property
    def is_completed(self) -> bool:
        return self.status == ProjectStatus.COMPLETED.value
