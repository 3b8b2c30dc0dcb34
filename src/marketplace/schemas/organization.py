"""Organization, join request and partnership interest schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.marketplace.models import PartnershipType


class OrganizationCreate(BaseModel):
    """Schema for creating an organization."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Organization name cannot be empty or whitespace only")
        return v


class OrganizationRead(BaseModel):
    """Schema for reading an organization."""

    id: UUID
    owner_id: UUID
    name: str
    description: str | None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JoinRequestCreate(BaseModel):
    message: str = Field(default="", max_length=5000)


class JoinRequestRead(BaseModel):
    """Schema for reading a join request."""

    id: UUID
    organization_id: UUID
    user_id: UUID
    message: str
    status: str
    decided_by_user_id: UUID | None
    decided_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class InterestCreate(BaseModel):
    """Schema for publishing a partnership interest."""

    partnership_type: PartnershipType
    description: str = Field(min_length=1, max_length=2000)


class InterestRead(BaseModel):
    """Schema for reading a partnership interest."""

    id: UUID
    organization_id: UUID
    partnership_type: str
    description: str
    is_open: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class PartnershipApplicationCreate(BaseModel):
    """Schema for applying against a partnership interest."""

    message: str = Field(default="", max_length=5000)
    project_id: UUID | None = None


class PartnershipApplicationRead(BaseModel):
    """Schema for reading a partnership application."""

    id: UUID
    organization_id: UUID
    interest_id: UUID
    user_id: UUID
    partnership_type: str
    project_id: UUID | None
    message: str
    status: str
    decided_by_user_id: UUID | None
    decided_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}
