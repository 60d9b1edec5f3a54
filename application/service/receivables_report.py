from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from domain.entities import Contract, MonthlyPayment, PaymentStatus
from domain.exceptions import ValidationError
from domain.interfaces import MonthlyPaymentRepository


@dataclass
class ReceivableItem:
    payment: MonthlyPayment
    contract: Contract
    status: str


@dataclass
class ReceivablesReport:
    start: date
    end: date
    items: list[ReceivableItem]
    totals: dict[str, Decimal] = field(default_factory=dict)

    @property
    def total_amount(self) -> Decimal:
        return sum(self.totals.values(), Decimal("0.00"))


class ReceivablesReportService:
    def __init__(self, payment_repo: MonthlyPaymentRepository):
        self.payment_repo = payment_repo

    async def execute(self, start: date, end: date, today: Optional[date] = None) -> ReceivablesReport:
        """Payments due in the inclusive window with totals per paid/pending/overdue."""
        if start > end:
            raise ValidationError("invalid period: start date is after end date")
        today = today or date.today()

        rows = await self.payment_repo.list_payments_due_between(start, end)
        items = [ReceivableItem(payment=p, contract=c, status=p.effective_status(today)) for p, c in rows]

        totals = {s.value: Decimal("0.00") for s in PaymentStatus}
        for item in items:
            totals[item.status] += Decimal(item.payment.amount)

        return ReceivablesReport(start=start, end=end, items=items, totals=totals)
