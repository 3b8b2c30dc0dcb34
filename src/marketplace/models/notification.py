"""Notification model - user-directed, write-once except for the read flag."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now


class Notification(SQLModel, table=True):
    """In-app notification for a single recipient."""

    __tablename__ = "notifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=200)
    message: str = Field(max_length=2000)
    link: str | None = Field(default=None, max_length=500)
    read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, index=True)
