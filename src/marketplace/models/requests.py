"""Request models - project applications, join requests, partnership applications.

All three share the pending -> approved | rejected lifecycle. A decided row is
never reopened; applying again creates a new row.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.enums import RequestStatus


class ProjectApplication(SQLModel, table=True):
    """A user's application to partner on a project."""

    __tablename__ = "project_applications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    organization_id: UUID | None = Field(default=None, foreign_key="organizations.id")
    partnership_type: str = Field(max_length=20)
    message: str = Field(default="", max_length=5000)
    status: str = Field(default=RequestStatus.PENDING.value, max_length=20, index=True)
    decided_by_user_id: UUID | None = Field(default=None, foreign_key="users.id")
    decided_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class OrganizationJoinRequest(SQLModel, table=True):
    """A user's request to become a member of an organization."""

    __tablename__ = "organization_join_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    organization_id: UUID = Field(foreign_key="organizations.id", index=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    message: str = Field(default="", max_length=5000)
    status: str = Field(default=RequestStatus.PENDING.value, max_length=20, index=True)
    decided_by_user_id: UUID | None = Field(default=None, foreign_key="users.id")
    decided_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class PartnershipApplication(SQLModel, table=True):
    """A user's application against an organization's partnership interest."""

    __tablename__ = "partnership_applications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    organization_id: UUID = Field(foreign_key="organizations.id", index=True)
    interest_id: UUID = Field(foreign_key="partnership_interests.id", index=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    partnership_type: str = Field(max_length=20)
    project_id: UUID | None = Field(default=None, foreign_key="projects.id")
    message: str = Field(default="", max_length=5000)
    status: str = Field(default=RequestStatus.PENDING.value, max_length=20, index=True)
    decided_by_user_id: UUID | None = Field(default=None, foreign_key="users.id")
    decided_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
