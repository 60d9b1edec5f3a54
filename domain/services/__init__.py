from .schedule import build_schedule, aggregate_payment_status, summarize_payments, PaymentSummary
from .expiry import classify_contract_expiry, classify_payment_due

__all__ = [
    "build_schedule",
    "aggregate_payment_status",
    "summarize_payments",
    "PaymentSummary",
    "classify_contract_expiry",
    "classify_payment_due",
]
