"""Partnership schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from src.marketplace.models import PartnershipType


class PartnershipView(BaseModel):
    """One reconciled partnership of a user with a project.

    Built either from a Partnership row or, when none exists yet, from an
    approved project application.
    """

    id: UUID
    project_id: UUID
    partner_id: UUID
    organization_id: UUID | None = None
    partnership_type: str
    status: str
    source: Literal["partnership", "application"]
    project_title: str | None = None
    project_status: str | None = None
    created_at: datetime


class PartnershipRead(BaseModel):
    """Schema for reading a stored partnership."""

    id: UUID
    project_id: UUID
    partner_id: UUID
    organization_id: UUID | None
    partnership_type: PartnershipType
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PartnershipListResponse(BaseModel):
    """Response for listing a user's partnerships."""

    partnerships: list[PartnershipView]
    total: int
