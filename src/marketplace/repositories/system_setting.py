"""Repository for SystemSetting entity."""

from sqlmodel import select

from src.marketplace.models import SystemSetting
from src.marketplace.models.base import touch
from src.marketplace.repositories.base import BaseRepository


class SystemSettingRepository(BaseRepository[SystemSetting]):
    """Repository for system-wide settings."""

    model = SystemSetting

    async def get_by_key(self, key: str) -> SystemSetting | None:
        """Get a setting by key."""
        result = await self.session.execute(select(SystemSetting).where(SystemSetting.key == key))
        return result.scalar_one_or_none()

    async def get_values(self) -> dict[str, bool]:
        """Read every setting as a key -> value map."""
        result = await self.session.execute(select(SystemSetting))
        return {setting.key: setting.value for setting in result.scalars().all()}

    async def upsert(self, key: str, value: bool) -> SystemSetting:
        """Set a setting value, creating the row if needed (no commit)."""
        setting = await self.get_by_key(key)
        if setting is None:
            setting = SystemSetting(key=key, value=value)
        else:
            setting.value = value
            touch(setting)
        self.session.add(setting)
        await self.session.flush()
        return setting
