from .push_client import PushNotificationClient
from .push_sink import PushNotificationSink

__all__ = ["PushNotificationClient", "PushNotificationSink"]
