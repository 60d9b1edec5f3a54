"""
Expiry Classification Module

Turns contracts nearing their end date and payments nearing their due
date into notification events. Pure functions; the scheduler decides
when to call them and where the events go.
"""
from datetime import date
from decimal import Decimal

from domain.entities import Contract, MonthlyPayment, NotificationEvent, NotificationKind

DEFAULT_CONTRACT_URGENT_DAYS = 3
DEFAULT_PAYMENT_URGENT_DAYS = 2


def _plural_days(days: int) -> str:
    return f"{days} day" if days == 1 else f"{days} days"


def _contract_url(contract_id: str) -> str:
    return f"/contracts/{contract_id}"


def classify_contract_expiry(
    contract: Contract,
    today: date,
    urgent_days: int = DEFAULT_CONTRACT_URGENT_DAYS,
) -> NotificationEvent:
    """
    Classify a contract by days until its end date.

    days < 0   -> "expired N days ago" (urgent)
    days == 0  -> "expires today" (urgent)
    1..urgent  -> "expires in N days" (urgent)
    otherwise  -> "expires in N days"
    """
    days = contract.days_until_expiry(today)

    if days < 0:
        message = f"Contract {contract.number} expired {_plural_days(abs(days))} ago"
        urgent = True
    elif days == 0:
        message = f"Contract {contract.number} expires today"
        urgent = True
    else:
        message = f"Contract {contract.number} expires in {_plural_days(days)}"
        urgent = days <= urgent_days

    body = message
    if contract.client_name:
        body = f"{message}\nClient: {contract.client_name}"

    return NotificationEvent(
        kind=NotificationKind.CONTRACT_EXPIRY.value,
        subject_id=contract.id,
        contract_id=contract.id,
        title="Contract expiring",
        body=body,
        days_until=days,
        urgent=urgent,
        tag=f"contract-{contract.id}",
        url=_contract_url(contract.id),
    )


def classify_payment_due(
    payment: MonthlyPayment,
    contract: Contract,
    today: date,
    urgent_days: int = DEFAULT_PAYMENT_URGENT_DAYS,
) -> NotificationEvent:
    days = (payment.due_date - today).days
    urgent = days <= urgent_days
    label = "URGENT" if urgent else "Reminder"

    if days == 0:
        title = f"{label}: Payment due today"
    else:
        title = f"{label}: Payment due in {_plural_days(days)}"

    lines = []
    if contract.client_name:
        lines.append(f"Client: {contract.client_name}")
    lines.append(f"Contract: {contract.number}")
    lines.append(f"Period: {payment.reference_period}")
    lines.append(f"Amount: {Decimal(payment.amount):.2f}")

    return NotificationEvent(
        kind=NotificationKind.PAYMENT_DUE.value,
        subject_id=payment.id,
        contract_id=contract.id,
        title=title,
        body="\n".join(lines),
        days_until=days,
        urgent=urgent,
        tag=f"payment-{payment.id}",
        url=_contract_url(contract.id),
    )
