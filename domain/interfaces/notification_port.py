from typing_extensions import Protocol

from domain.entities import NotificationEvent


class NotificationPort(Protocol):
    """Protocol for OS-level (push) notification delivery."""

    async def show_notification(self, event: NotificationEvent) -> None:
        """
        Display an OS-level notification.

        Notifications sharing a tag replace each other instead of stacking.

        Raises:
            NotificationPermissionError: permission not granted
            NotificationDeliveryError: the gateway rejected the notification
        """
        ...


class ToastPort(Protocol):
    """Protocol for in-app toasts."""

    def show_toast(self, event: NotificationEvent) -> None: ...
