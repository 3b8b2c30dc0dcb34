"""Project and project application schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.marketplace.models import PartnershipType


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    organization_id: UUID | None = None
    partnership_types_sought: list[PartnershipType] = Field(default_factory=list)
    publish: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project title cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    organizer_id: UUID
    organization_id: UUID | None
    title: str
    description: str | None
    status: str
    applications_enabled: bool
    partnership_types_sought: list[str]
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ApplicationsToggle(BaseModel):
    """Open or close a project for new applications."""

    enabled: bool


class ApplicationCreate(BaseModel):
    """Schema for applying to partner on a project."""

    partnership_type: PartnershipType
    message: str = Field(default="", max_length=5000)
    organization_id: UUID | None = None


class ApplicationRead(BaseModel):
    """Schema for reading a project application."""

    id: UUID
    project_id: UUID
    user_id: UUID
    organization_id: UUID | None
    partnership_type: str
    message: str
    status: str
    decided_by_user_id: UUID | None
    decided_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ApplicationListResponse(BaseModel):
    """Response for listing applications."""

    applications: list[ApplicationRead]
    total: int
