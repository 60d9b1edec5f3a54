from dataclasses import dataclass
from enum import Enum


class NotificationPermission(Enum):
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"


@dataclass
class NotificationSettings:
    enabled: bool = False
    permission: str = NotificationPermission.DEFAULT.value

    @property
    def push_allowed(self) -> bool:
        return self.permission == NotificationPermission.GRANTED.value
