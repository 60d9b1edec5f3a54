from .expiry_scheduler import ExpiryNotificationScheduler, SchedulerHandle

__all__ = ["ExpiryNotificationScheduler", "SchedulerHandle"]
