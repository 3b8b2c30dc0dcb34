"""System settings - admin-controlled policy switches."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now


class SystemSetting(SQLModel, table=True):
    """Boolean key/value setting read by the policy resolver."""

    __tablename__ = "system_settings"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    key: str = Field(max_length=100, unique=True, index=True)
    value: bool = Field(default=False)
    description: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
