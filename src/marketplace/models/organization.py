"""Organization, membership and partnership interest models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now
from src.marketplace.models.enums import MemberRole, OrganizationStatus


class Organization(SQLModel, table=True):
    """Organization owned by a user; status decided at creation by policy."""

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: UUID = Field(foreign_key="users.id", index=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=5000)
    status: str = Field(
        default=OrganizationStatus.PENDING_APPROVAL.value, max_length=20, index=True
    )
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> OrganizationStatus:
        """Get status as OrganizationStatus enum."""
        return OrganizationStatus(self.status)


class OrganizationMember(SQLModel, table=True):
    """Junction table for user-organization membership."""

    __tablename__ = "organization_members"

    organization_id: UUID = Field(foreign_key="organizations.id", primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    role: str = Field(default=MemberRole.MEMBER.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now)


class PartnershipInterest(SQLModel, table=True):
    """An organization's standing call for a kind of partner."""

    __tablename__ = "partnership_interests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    organization_id: UUID = Field(foreign_key="organizations.id", index=True)
    partnership_type: str = Field(max_length=20)
    description: str = Field(max_length=2000)
    is_open: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
