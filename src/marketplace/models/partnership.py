"""Partnership model - the durable record of an accepted collaboration."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.enums import PartnershipStatus


class Partnership(SQLModel, table=True):
    """Partnership between a user and a project.

    At most one row per (project_id, partner_id), enforced by
    PartnershipMaterializer. The composite index is non-unique because older
    direct writes may have left duplicates behind.
    """

    __tablename__ = "partnerships"
    __table_args__ = (Index("ix_partnerships_project_partner", "project_id", "partner_id"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    partner_id: UUID = Field(foreign_key="users.id", index=True)
    organization_id: UUID | None = Field(default=None, foreign_key="organizations.id")
    partnership_type: str = Field(max_length=20)
    status: str = Field(default=PartnershipStatus.ACTIVE.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
