"""Notification schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class NotificationRead(BaseModel):
    """Schema for reading a notification."""

    id: UUID
    title: str
    message: str
    link: str | None
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MarkAllReadResponse(BaseModel):
    updated: int
