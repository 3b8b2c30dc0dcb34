"""User model - identity mirror used for ownership and admin checks."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.marketplace.models.base import utc_now


class User(SQLModel, table=True):
    """User known to the marketplace.

    Accounts are managed by the identity provider; this row carries what the
    approval rules need: display name, email and the platform admin flag.
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(max_length=100)
    is_active: bool = Field(default=True)
    is_superuser: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.is_superuser
