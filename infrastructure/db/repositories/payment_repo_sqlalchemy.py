from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
from domain.entities import Contract, ContractStatus, MonthlyPayment, PaymentStatus
from domain.exceptions import StorageError
from domain.interfaces import MonthlyPaymentRepository
from infrastructure.db.models import ContractModel, MonthlyPaymentModel


class MonthlyPaymentRepoSqlalchemy(MonthlyPaymentRepository):
    """SQLAlchemy implementation of MonthlyPaymentRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def has_schedule(self, contract_id: str) -> bool:
        stmt = select(func.count()).select_from(MonthlyPaymentModel).where(
            MonthlyPaymentModel.contract_id == contract_id
        )
        result = await self.db.execute(stmt)
        return (result.scalar_one() or 0) > 0

    async def save_schedule(
        self,
        contract_id: str,
        payments: list[MonthlyPayment],
        replace_existing: bool = False,
    ) -> list[MonthlyPayment]:
        """Insert the whole schedule in one transaction (all-or-nothing)."""
        try:
            if replace_existing:
                await self.db.execute(
                    delete(MonthlyPaymentModel).where(MonthlyPaymentModel.contract_id == contract_id)
                )
            self.db.add_all([MonthlyPaymentModel.from_domain(p) for p in payments])
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Failed to save payment schedule for contract {contract_id}: {e}") from e
        return payments

    async def get_payment(self, payment_id: str) -> Optional[MonthlyPayment]:
        payment_model = await self._get_model(payment_id)
        return payment_model.to_domain() if payment_model else None

    async def update_payment(self, payment: MonthlyPayment) -> MonthlyPayment:
        try:
            payment_model = await self._get_model(payment.id)
            if payment_model is None:
                raise StorageError(f"Monthly payment {payment.id} disappeared before update")
            payment_model.apply(payment)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Failed to update monthly payment {payment.id}: {e}") from e
        return payment_model.to_domain()

    async def delete_payment(self, payment_id: str) -> bool:
        """Delete exactly one row. Returns False when nothing matched."""
        try:
            result = await self.db.execute(
                delete(MonthlyPaymentModel).where(MonthlyPaymentModel.id == payment_id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Failed to delete monthly payment {payment_id}: {e}") from e
        return result.rowcount > 0

    async def list_contract_payments(self, contract_id: str) -> list[MonthlyPayment]:
        stmt = (
            select(MonthlyPaymentModel)
            .where(MonthlyPaymentModel.contract_id == contract_id)
            .order_by(MonthlyPaymentModel.due_date, MonthlyPaymentModel.reference_period)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load payments of contract {contract_id}: {e}") from e
        return [pm.to_domain() for pm in result.scalars().all()]

    async def list_payments_due_between(self, start: date, end: date) -> list[tuple[MonthlyPayment, Contract]]:
        stmt = (
            select(MonthlyPaymentModel, ContractModel)
            .join(ContractModel, ContractModel.id == MonthlyPaymentModel.contract_id)
            .where(MonthlyPaymentModel.due_date >= start)
            .where(MonthlyPaymentModel.due_date <= end)
            .order_by(MonthlyPaymentModel.due_date)
        )
        result = await self.db.execute(stmt)
        return [(pm.to_domain(), cm.to_domain()) for pm, cm in result.all()]

    async def list_pending_payments_due_between(self, start: date, end: date) -> list[tuple[MonthlyPayment, Contract]]:
        stmt = (
            select(MonthlyPaymentModel, ContractModel)
            .join(ContractModel, ContractModel.id == MonthlyPaymentModel.contract_id)
            .where(ContractModel.status == ContractStatus.ACTIVE.value)
            .where(MonthlyPaymentModel.status == PaymentStatus.PENDING.value)
            .where(MonthlyPaymentModel.due_date >= start)
            .where(MonthlyPaymentModel.due_date <= end)
            .order_by(MonthlyPaymentModel.due_date)
        )
        result = await self.db.execute(stmt)
        return [(pm.to_domain(), cm.to_domain()) for pm, cm in result.all()]

    async def _get_model(self, payment_id: str) -> Optional[MonthlyPaymentModel]:
        stmt = select(MonthlyPaymentModel).where(MonthlyPaymentModel.id == payment_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
