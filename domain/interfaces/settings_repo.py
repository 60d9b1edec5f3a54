from typing_extensions import Protocol

from domain.entities import NotificationSettings


class SettingsRepository(Protocol):
    async def get_notification_settings(self) -> NotificationSettings: ...
    async def save_notification_settings(self, settings: NotificationSettings) -> NotificationSettings: ...
