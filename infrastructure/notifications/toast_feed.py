from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.entities import NotificationEvent
from domain.interfaces import ToastPort


@dataclass(frozen=True)
class Toast:
    title: str
    body: str
    urgent: bool
    tag: str
    url: str
    created_at: datetime


class InMemoryToastFeed(ToastPort):
    """Bounded feed of recent in-app toasts; oldest entries fall off."""

    def __init__(self, max_size: int = 50):
        self._toasts: deque[Toast] = deque(maxlen=max_size)

    def show_toast(self, event: NotificationEvent) -> None:
        self._toasts.append(
            Toast(
                title=event.title,
                body=event.body,
                urgent=event.urgent,
                tag=event.tag,
                url=event.url,
                created_at=datetime.now(),
            )
        )

    def recent(self, limit: Optional[int] = None) -> list[Toast]:
        """Newest first."""
        toasts = list(reversed(self._toasts))
        return toasts[:limit] if limit is not None else toasts

    def clear(self) -> None:
        self._toasts.clear()

    def __len__(self) -> int:
        return len(self._toasts)
