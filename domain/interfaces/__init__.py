from .contract_repo import ContractRepository
from .payment_repo import MonthlyPaymentRepository
from .settings_repo import SettingsRepository
from .notification_port import NotificationPort, ToastPort
from .metrics_port import MetricsPort
from .logging_port import LoggingPort, BoundLogger

__all__ = [
    "ContractRepository",
    "MonthlyPaymentRepository",
    "SettingsRepository",
    "NotificationPort",
    "ToastPort",
    "MetricsPort",
    "LoggingPort",
    "BoundLogger",
]
