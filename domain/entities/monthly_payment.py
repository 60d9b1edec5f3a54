from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    # Derived on read, never stored
    OVERDUE = "overdue"


STORED_STATUSES = (PaymentStatus.PENDING.value, PaymentStatus.PAID.value)


@dataclass
class MonthlyPayment:
    id: str
    contract_id: str
    reference_period: str
    amount: Decimal
    due_date: date
    status: str
    paid_date: Optional[date] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @staticmethod
    def create(contract_id: str, reference_period: str, amount: Decimal, due_date: date) -> 'MonthlyPayment':
        return MonthlyPayment(
            id=str(uuid4()),
            contract_id=contract_id,
            reference_period=reference_period,
            amount=amount,
            due_date=due_date,
            status=PaymentStatus.PENDING.value,
            paid_date=None,
            created_at=datetime.now(),
        )

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID.value

    def is_overdue(self, today: date) -> bool:
        return self.paid_date is None and not self.is_paid and self.due_date < today

    def effective_status(self, today: date) -> str:
        """Stored status, with overdue computed from the due date."""
        if self.is_overdue(today):
            return PaymentStatus.OVERDUE.value
        return self.status
