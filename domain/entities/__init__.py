# import
from .contract import Contract, ContractStatus, ContractPaymentStatus
from .monthly_payment import MonthlyPayment, PaymentStatus
from .notification import NotificationEvent, NotificationKind
from .session import Profile, Role, Session, Unauthenticated
from .settings import NotificationPermission, NotificationSettings

__all__ = [
    "Contract", "ContractStatus", "ContractPaymentStatus",
    "MonthlyPayment", "PaymentStatus",
    "NotificationEvent", "NotificationKind",
    "Profile", "Role", "Session", "Unauthenticated",
    "NotificationPermission", "NotificationSettings",
]
