from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ContractStatus(Enum):
    PENDING = "pending"
    ACTIVE = "active"
    FINISHED = "finished"
    CANCELED = "canceled"


class ContractPaymentStatus(Enum):
    """Aggregate of a contract's monthly payments."""
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


@dataclass
class Contract:
    id: str
    number: str
    start_date: date
    end_date: date
    total_value: Decimal
    status: str
    client_name: Optional[str] = None
    payment_status: str = ContractPaymentStatus.PENDING.value

    @property
    def is_active(self) -> bool:
        return self.status == ContractStatus.ACTIVE.value

    def days_until_expiry(self, today: date) -> int:
        """Whole days from today to end_date; negative once expired."""
        return (self.end_date - today).days
