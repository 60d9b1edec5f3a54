# app/schemas/payment_schema.py
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from domain.entities import MonthlyPayment


class GenerateMonthlyPaymentsRequest(BaseModel):
    """Body of POST /v1/generate-monthly-payments (camelCase as sent by the web client)."""
    model_config = ConfigDict(populate_by_name=True)

    contract_id: str = Field(alias="contratoId", min_length=1)
    start_date: date = Field(alias="dataInicio")
    end_date: date = Field(alias="dataFim")
    total_value: Decimal = Field(alias="valorTotal", decimal_places=2)
    replace_existing: bool = Field(default=False, alias="replaceExisting")


class GenerateMonthlyPaymentsResponse(BaseModel):
    success: bool = True
    months: int


class MonthlyPaymentUpdate(BaseModel):
    """Partial update; omitted fields stay unchanged, explicit null clears paid_date unless the row stays paid."""
    amount: Optional[Decimal] = Field(default=None, decimal_places=2)
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    status: Optional[str] = None


class MonthlyPaymentResponse(BaseModel):
    id: str
    contract_id: str
    reference_period: str
    amount: Decimal
    due_date: date
    paid_date: Optional[date] = None
    status: str
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, payment: MonthlyPayment, today: date) -> "MonthlyPaymentResponse":
        return cls(
            id=payment.id,
            contract_id=payment.contract_id,
            reference_period=payment.reference_period,
            amount=payment.amount,
            due_date=payment.due_date,
            paid_date=payment.paid_date,
            status=payment.effective_status(today),
            updated_at=payment.updated_at,
        )


class PaymentSummaryResponse(BaseModel):
    total_months: int
    paid_months: int
    pending_months: int
    overdue_months: int
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    payment_status: str


class ContractPaymentsResponse(BaseModel):
    contract_id: str
    contract_number: str
    contract_status: str
    payments: List[MonthlyPaymentResponse]
    summary: PaymentSummaryResponse


class ReceivableResponse(BaseModel):
    payment: MonthlyPaymentResponse
    contract_number: str
    client_name: Optional[str] = None


class ReceivablesReportResponse(BaseModel):
    start: date
    end: date
    items: List[ReceivableResponse]
    totals: dict[str, Decimal]
    total_amount: Decimal
