"""Policy resolution - system settings that branch the initial status of new entities."""

from dataclasses import dataclass
from typing import Literal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.marketplace.core.config import Settings, get_settings
from src.marketplace.core.exceptions import DependencyFailureError, NotFoundError
from src.marketplace.core.logging import get_logger
from src.marketplace.models import (
    OrganizationStatus,
    ProjectStatus,
    SettingKey,
    SystemSetting,
    User,
)
from src.marketplace.repositories import SystemSettingRepository
from src.marketplace.services.access import ensure_admin

logger = get_logger(__name__)

SETTING_DESCRIPTIONS = {
    SettingKey.AUTO_APPROVE_ORGANIZATIONS: "New organizations become active without admin review",
    SettingKey.AUTO_APPROVE_PROJECTS: "New projects skip admin review (informational)",
    SettingKey.REQUIRE_PROJECT_APPROVAL: "Publishing a project requires admin approval",
}


@dataclass(frozen=True)
class Policy:
    """Snapshot of the approval settings, taken when an operation starts.

    The status an entity receives from a policy is final for that entity;
    later setting changes never re-evaluate it.
    """

    auto_approve_organizations: bool = False
    auto_approve_projects: bool = False
    require_project_approval: bool = True

    def initial_organization_status(self) -> OrganizationStatus:
        if self.auto_approve_organizations:
            return OrganizationStatus.ACTIVE
        return OrganizationStatus.PENDING_APPROVAL

    def project_publish_status(self) -> ProjectStatus:
        if self.require_project_approval:
            return ProjectStatus.PENDING_PUBLISH
        return ProjectStatus.PUBLISHED

    def effective_initial_status(
        self, kind: Literal["project", "organization"]
    ) -> ProjectStatus | OrganizationStatus:
        """Status a new organization, or a project being published, starts in."""
        if kind == "organization":
            return self.initial_organization_status()
        if kind == "project":
            return self.project_publish_status()
        raise ValueError(f"Unknown policy kind: {kind}")


class PolicyResolver:
    """Reads the current settings into a Policy, and lets admins change them."""

    def __init__(
        self,
        setting_repo: SystemSettingRepository,
        session: AsyncSession,
        settings: Settings | None = None,
    ):
        self.setting_repo = setting_repo
        self.session = session
        self.settings = settings or get_settings()

    def _defaults(self) -> dict[str, bool]:
        return {
            SettingKey.AUTO_APPROVE_ORGANIZATIONS.value: (
                self.settings.default_auto_approve_organizations
            ),
            SettingKey.AUTO_APPROVE_PROJECTS.value: self.settings.default_auto_approve_projects,
            SettingKey.REQUIRE_PROJECT_APPROVAL.value: (
                self.settings.default_require_project_approval
            ),
        }

    async def list_settings(self) -> dict[str, bool]:
        """Current value of every policy key, falling back to configured defaults."""
        values = self._defaults()
        stored = await self.setting_repo.get_values()
        for key in values:
            if key in stored:
                values[key] = stored[key]
        return values

    async def resolve(self) -> Policy:
        """Read the settings now. Never cached: an admin may flip them at any time."""
        values = await self.list_settings()
        return Policy(
            auto_approve_organizations=values[SettingKey.AUTO_APPROVE_ORGANIZATIONS.value],
            auto_approve_projects=values[SettingKey.AUTO_APPROVE_PROJECTS.value],
            require_project_approval=values[SettingKey.REQUIRE_PROJECT_APPROVAL.value],
        )

    async def update_setting(self, key: str, value: bool, actor: User) -> SystemSetting:
        """Change one policy setting (admin only)."""
        ensure_admin(actor)
        try:
            setting_key = SettingKey(key)
        except ValueError as e:
            raise NotFoundError(f"Unknown setting: {key}") from e

        try:
            setting = await self.setting_repo.upsert(setting_key.value, value)
            if setting.description is None:
                setting.description = SETTING_DESCRIPTIONS[setting_key]
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to update setting", key=key, error=str(e))
            raise DependencyFailureError("Could not save setting") from e

        logger.info(
            "System setting updated",
            key=setting_key.value,
            value=value,
            updated_by=str(actor.id),
        )
        return setting
