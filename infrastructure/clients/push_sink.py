"""
NotificationPort implementation that checks the persisted OS permission
before handing the event to the push gateway client.
"""
from typing import Optional

from domain.entities import NotificationEvent, NotificationSettings
from domain.exceptions import NotificationPermissionError
from domain.interfaces import NotificationPort, SettingsRepository
from infrastructure.clients.push_client import PushNotificationClient


class PushNotificationSink(NotificationPort):
    """
    One sink per check cycle: the permission is read on first use and
    reused for the remaining events of that cycle.
    """

    def __init__(self, client: PushNotificationClient, settings_repo: SettingsRepository):
        self.client = client
        self.settings_repo = settings_repo
        self._settings: Optional[NotificationSettings] = None

    async def show_notification(self, event: NotificationEvent) -> None:
        if self._settings is None:
            self._settings = await self.settings_repo.get_notification_settings()
        if not self._settings.push_allowed:
            raise NotificationPermissionError(
                f"Push notifications not permitted (permission={self._settings.permission})"
            )
        await self.client.send(event)
