from typing import Optional

from domain.entities import NotificationPermission, NotificationSettings
from domain.exceptions import ValidationError
from domain.interfaces import LoggingPort, SettingsRepository
from application.service.logging_utils import bind_logger


class NotificationSettingsService:
    def __init__(self, settings_repo: SettingsRepository, logging_port: Optional[LoggingPort] = None):
        self.settings_repo = settings_repo
        self.logging_port = logging_port

    async def get(self) -> NotificationSettings:
        return await self.settings_repo.get_notification_settings()

    async def update(self, enabled: Optional[bool] = None, permission: Optional[str] = None) -> NotificationSettings:
        """Change the enabled flag and/or the recorded OS permission; None leaves a field as is."""
        log = bind_logger(self.logging_port, step="notification_settings")
        if permission is not None and permission not in {p.value for p in NotificationPermission}:
            raise ValidationError(f"unknown notification permission: {permission}")

        settings = await self.settings_repo.get_notification_settings()
        if enabled is not None:
            settings.enabled = enabled
        if permission is not None:
            settings.permission = permission

        saved = await self.settings_repo.save_notification_settings(settings)
        log.info("notification_settings_updated", enabled=saved.enabled, permission=saved.permission)
        return saved
