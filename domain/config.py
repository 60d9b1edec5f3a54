"""
Configuration module for the rental back-office core.

All configuration values are loaded from environment variables with sensible defaults.
See .env.example for all available configuration options.
"""
import os
from dataclasses import dataclass


def _get_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    return int(os.getenv(key, default))


def _get_bool(key: str, default: bool) -> bool:
    """Get bool from environment variable ("1", "true", "yes" are truthy)."""
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class NotificationConfig:
    """Expiry notification scheduler settings."""

    # Poll cadence in seconds (one hour)
    check_interval_seconds: int = _get_int("NOTIFICATION_CHECK_INTERVAL_SECONDS", 3600)

    # Lookahead windows in days
    contract_lookahead_days: int = _get_int("CONTRACT_EXPIRY_LOOKAHEAD_DAYS", 7)
    payment_lookahead_days: int = _get_int("PAYMENT_DUE_LOOKAHEAD_DAYS", 5)

    # Urgency thresholds in days
    contract_urgent_days: int = _get_int("CONTRACT_URGENT_DAYS", 3)
    payment_urgent_days: int = _get_int("PAYMENT_URGENT_DAYS", 2)

    icon: str = os.getenv("NOTIFICATION_ICON", "/logo.png")
    toast_feed_size: int = _get_int("TOAST_FEED_SIZE", 50)
    scheduler_enabled: bool = _get_bool("NOTIFICATION_SCHEDULER_ENABLED", True)


@dataclass
class PushConfig:
    """Push gateway client settings."""
    gateway_url: str = os.getenv("PUSH_GATEWAY_URL", "http://localhost:8003")
    max_retries: int = _get_int("PUSH_MAX_RETRIES", 3)


# Global config instances (lazy loaded)
_notification_config = None
_push_config = None


def get_notification_config() -> NotificationConfig:
    """Get notification scheduler configuration."""
    global _notification_config
    if _notification_config is None:
        _notification_config = NotificationConfig()
    return _notification_config


def get_push_config() -> PushConfig:
    """Get push gateway configuration."""
    global _push_config
    if _push_config is None:
        _push_config = PushConfig()
    return _push_config


def reload_config():
    """Force reload of all configuration from environment variables."""
    global _notification_config, _push_config
    _notification_config = NotificationConfig(
        check_interval_seconds=_get_int("NOTIFICATION_CHECK_INTERVAL_SECONDS", 3600),
        contract_lookahead_days=_get_int("CONTRACT_EXPIRY_LOOKAHEAD_DAYS", 7),
        payment_lookahead_days=_get_int("PAYMENT_DUE_LOOKAHEAD_DAYS", 5),
        contract_urgent_days=_get_int("CONTRACT_URGENT_DAYS", 3),
        payment_urgent_days=_get_int("PAYMENT_URGENT_DAYS", 2),
        icon=os.getenv("NOTIFICATION_ICON", "/logo.png"),
        toast_feed_size=_get_int("TOAST_FEED_SIZE", 50),
        scheduler_enabled=_get_bool("NOTIFICATION_SCHEDULER_ENABLED", True),
    )
    _push_config = PushConfig(
        gateway_url=os.getenv("PUSH_GATEWAY_URL", "http://localhost:8003"),
        max_retries=_get_int("PUSH_MAX_RETRIES", 3),
    )
