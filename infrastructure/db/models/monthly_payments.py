from datetime import date, datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING
from sqlalchemy import Column, String, Date, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, relationship
from domain.entities.monthly_payment import MonthlyPayment
from infrastructure.db.models.base import Base

if TYPE_CHECKING:
    from infrastructure.db.models.contracts import ContractModel


class MonthlyPaymentModel(Base):
    __tablename__ = "monthly_payment"
    __table_args__ = (
        Index("ix_monthly_payment_contract_id", "contract_id"),
        Index("ix_monthly_payment_due_date", "due_date"),
    )

    id: Mapped[str] = Column(UUID(as_uuid=False), primary_key=True)
    contract_id: Mapped[str] = Column(UUID(as_uuid=False), ForeignKey("rental_contract.id"), nullable=False)
    reference_period: Mapped[str] = Column(String(7), nullable=False)  # YYYY-MM
    amount: Mapped[Decimal] = Column(Numeric(12, 2), nullable=False)
    due_date: Mapped[date] = Column(Date, nullable=False)
    paid_date: Mapped[Optional[date]] = Column(Date, nullable=True)
    status: Mapped[str] = Column(String, nullable=False)  # pending|paid, overdue is derived
    created_at: Mapped[datetime] = Column(DateTime, nullable=False)
    updated_at: Mapped[Optional[datetime]] = Column(DateTime, nullable=True)

    contract_rel: Mapped["ContractModel"] = relationship(
        "ContractModel",
        back_populates="payments_rel"
    )

    def to_domain(self) -> MonthlyPayment:
        """Convert database model to domain entity."""
        return MonthlyPayment(
            id=self.id,
            contract_id=self.contract_id,
            reference_period=self.reference_period,
            amount=self.amount,
            due_date=self.due_date,
            paid_date=self.paid_date,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_domain(cls, payment: MonthlyPayment) -> "MonthlyPaymentModel":
        """Convert domain MonthlyPayment entity to database model."""
        return cls(
            id=payment.id,
            contract_id=payment.contract_id,
            reference_period=payment.reference_period,
            amount=payment.amount,
            due_date=payment.due_date,
            paid_date=payment.paid_date,
            status=payment.status if isinstance(payment.status, str) else payment.status.value,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )

    def apply(self, payment: MonthlyPayment) -> None:
        """Copy the mutable fields of an edited payment onto this row."""
        self.amount = payment.amount
        self.due_date = payment.due_date
        self.paid_date = payment.paid_date
        self.status = payment.status
        self.updated_at = payment.updated_at
