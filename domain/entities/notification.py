from dataclasses import dataclass
from enum import Enum


class NotificationKind(Enum):
    CONTRACT_EXPIRY = "contract_expiry"
    PAYMENT_DUE = "payment_due"


@dataclass(frozen=True)
class NotificationEvent:
    kind: str
    subject_id: str
    contract_id: str
    title: str
    body: str
    days_until: int
    urgent: bool
    tag: str
    url: str
