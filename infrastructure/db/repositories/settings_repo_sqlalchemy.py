from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from domain.entities import NotificationPermission, NotificationSettings
from domain.exceptions import StorageError
from domain.interfaces import SettingsRepository
from infrastructure.db.models import SystemSettingModel

ENABLED_KEY = "notifications_enabled"
PERMISSION_KEY = "notifications_permission"


class SettingsRepoSqlalchemy(SettingsRepository):
    """Notification settings stored as rows of the system_setting table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_notification_settings(self) -> NotificationSettings:
        stmt = select(SystemSettingModel).where(SystemSettingModel.key.in_([ENABLED_KEY, PERMISSION_KEY]))
        result = await self.db.execute(stmt)
        values = {row.key: row.value for row in result.scalars().all()}

        permission = values.get(PERMISSION_KEY, NotificationPermission.DEFAULT.value)
        if permission not in {p.value for p in NotificationPermission}:
            permission = NotificationPermission.DEFAULT.value

        return NotificationSettings(
            enabled=bool(values.get(ENABLED_KEY, False)),
            permission=permission,
        )

    async def save_notification_settings(self, settings: NotificationSettings) -> NotificationSettings:
        try:
            for key, value in ((ENABLED_KEY, settings.enabled), (PERMISSION_KEY, settings.permission)):
                row = await self.db.get(SystemSettingModel, key)
                if row is None:
                    self.db.add(SystemSettingModel(key=key, value=value, updated_at=datetime.now()))
                else:
                    row.value = value
                    row.updated_at = datetime.now()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Failed to save notification settings: {e}") from e
        return settings
