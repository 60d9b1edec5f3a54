"""
Monthly Payment Schedule Module

Partitions a contract's date range into calendar-month installments.

Bucketing policy: every calendar month touched by the inclusive
[start_date, end_date] range gets exactly one installment, so
2024-01-15..2024-04-15 yields January, February, March and April.
The due date keeps the start date's day-of-month, clamped to the
last valid day of shorter months.
"""
import calendar
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import TypedDict

from domain.entities.contract import ContractPaymentStatus
from domain.entities.monthly_payment import MonthlyPayment, PaymentStatus
from domain.exceptions import ValidationError

CENT = Decimal("0.01")


class PaymentSummary(TypedDict):
    total_months: int
    paid_months: int
    pending_months: int
    overdue_months: int
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    payment_status: str


def has_cent_precision(value: Decimal) -> bool:
    """True when value has no digits beyond the cent."""
    value = Decimal(value)
    return value == value.quantize(CENT)


def to_cents(value: Decimal) -> int:
    return int((Decimal(value) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def reference_period(year: int, month: int) -> str:
    """Calendar month label, e.g. "2024-03"."""
    return f"{year:04d}-{month:02d}"


def clamp_day(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def month_buckets(start_date: date, end_date: date) -> list[tuple[int, int]]:
    """(year, month) pairs covered by the inclusive range, in order."""
    if start_date > end_date:
        raise ValidationError("invalid period: start date is after end date")

    buckets = []
    year, month = start_date.year, start_date.month
    while (year, month) <= (end_date.year, end_date.month):
        buckets.append((year, month))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return buckets


def split_amount(total_value: Decimal, parts: int) -> list[Decimal]:
    """
    Equal split in cents; the last part absorbs the remainder so the
    parts always sum to total_value exactly.
    """
    if parts <= 0:
        raise ValidationError("invalid period: no months to schedule")
    if not has_cent_precision(total_value):
        raise ValidationError("total value must have at most 2 decimal places")

    total_cents = to_cents(total_value)
    base_amount = total_cents // parts
    remainder = total_cents % parts

    amounts = []
    for i in range(1, parts + 1):
        cents = base_amount + remainder if i == parts else base_amount
        amounts.append(from_cents(cents))
    return amounts


def build_schedule(contract_id: str, start_date: date, end_date: date, total_value: Decimal) -> list[MonthlyPayment]:
    """
    Build (without persisting) the monthly installments for a contract.

    Raises:
        ValidationError: empty contract id, start after end, negative total
            or a total with more than 2 decimal places
    """
    if not contract_id:
        raise ValidationError("contract id is required")
    if total_value is None or Decimal(total_value) < 0:
        raise ValidationError("total value must be greater than or equal to zero")
    if not has_cent_precision(total_value):
        raise ValidationError("total value must have at most 2 decimal places")

    buckets = month_buckets(start_date, end_date)
    amounts = split_amount(Decimal(total_value), len(buckets))

    return [
        MonthlyPayment.create(
            contract_id=contract_id,
            reference_period=reference_period(year, month),
            amount=amount,
            due_date=clamp_day(year, month, start_date.day),
        )
        for (year, month), amount in zip(buckets, amounts)
    ]


def aggregate_payment_status(payments: list[MonthlyPayment]) -> str:
    """paid when every row is paid, partial when some are, pending otherwise."""
    if not payments:
        return ContractPaymentStatus.PENDING.value

    paid = [p for p in payments if p.is_paid]
    if len(paid) == len(payments):
        return ContractPaymentStatus.PAID.value
    if paid:
        return ContractPaymentStatus.PARTIAL.value
    return ContractPaymentStatus.PENDING.value


def summarize_payments(payments: list[MonthlyPayment], today: date) -> PaymentSummary:
    statuses = [p.effective_status(today) for p in payments]
    total_amount = sum((Decimal(p.amount) for p in payments), Decimal("0"))
    paid_amount = sum((Decimal(p.amount) for p in payments if p.is_paid), Decimal("0"))

    return PaymentSummary(
        total_months=len(payments),
        paid_months=statuses.count(PaymentStatus.PAID.value),
        pending_months=statuses.count(PaymentStatus.PENDING.value),
        overdue_months=statuses.count(PaymentStatus.OVERDUE.value),
        total_amount=total_amount.quantize(CENT),
        paid_amount=paid_amount.quantize(CENT),
        outstanding_amount=(total_amount - paid_amount).quantize(CENT),
        payment_status=aggregate_payment_status(payments),
    )
