"""Admin schemas - approval queue and policy settings."""

from pydantic import BaseModel

from src.marketplace.schemas.organization import OrganizationRead
from src.marketplace.schemas.project import ProjectRead


class PendingApprovalsResponse(BaseModel):
    """Everything currently waiting for an admin decision."""

    organizations: list[OrganizationRead]
    projects: list[ProjectRead]


class SettingRead(BaseModel):
    key: str
    value: bool


class SettingUpdate(BaseModel):
    value: bool


class SettingsResponse(BaseModel):
    settings: list[SettingRead]
