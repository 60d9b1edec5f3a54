from datetime import date
from decimal import Decimal
from typing import Optional, TYPE_CHECKING
from sqlalchemy import Column, String, Date, Numeric
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, relationship
from domain.entities.contract import Contract, ContractPaymentStatus
from infrastructure.db.models.base import Base

if TYPE_CHECKING:
    from infrastructure.db.models.monthly_payments import MonthlyPaymentModel


class ContractModel(Base):
    """Rental contract. Owned by the back-office CRUD; the core reads it and writes payment_status."""

    __tablename__ = "rental_contract"

    id: Mapped[str] = Column(UUID(as_uuid=False), primary_key=True)
    number: Mapped[str] = Column(String, nullable=False)
    client_name: Mapped[Optional[str]] = Column(String, nullable=True)
    start_date: Mapped[date] = Column(Date, nullable=False)
    end_date: Mapped[date] = Column(Date, nullable=False)
    total_value: Mapped[Decimal] = Column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = Column(String, nullable=False)  # pending|active|finished|canceled
    payment_status: Mapped[str] = Column(String, nullable=False, default=ContractPaymentStatus.PENDING.value)

    payments_rel: Mapped[list["MonthlyPaymentModel"]] = relationship(
        "MonthlyPaymentModel",
        back_populates="contract_rel",
        lazy="raise",
    )

    def to_domain(self) -> Contract:
        return Contract(
            id=self.id,
            number=self.number,
            client_name=self.client_name,
            start_date=self.start_date,
            end_date=self.end_date,
            total_value=self.total_value,
            status=self.status,
            payment_status=self.payment_status or ContractPaymentStatus.PENDING.value,
        )
