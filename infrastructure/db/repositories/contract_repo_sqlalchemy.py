from datetime import date
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from domain.entities import Contract, ContractStatus
from domain.exceptions import StorageError
from domain.interfaces import ContractRepository
from infrastructure.db.models import ContractModel


class ContractRepoSqlalchemy(ContractRepository):
    """SQLAlchemy implementation of ContractRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_contract(self, contract_id: str) -> Optional[Contract]:
        stmt = select(ContractModel).where(ContractModel.id == contract_id)
        result = await self.db.execute(stmt)
        contract_model = result.scalar_one_or_none()
        return contract_model.to_domain() if contract_model else None

    async def list_active_contracts_ending_by(self, until: date) -> list[Contract]:
        """Active contracts whose end date is on or before `until`, already expired ones included."""
        stmt = (
            select(ContractModel)
            .where(ContractModel.status == ContractStatus.ACTIVE.value)
            .where(ContractModel.end_date <= until)
            .order_by(ContractModel.end_date)
        )
        result = await self.db.execute(stmt)
        return [cm.to_domain() for cm in result.scalars().all()]

    async def update_payment_status(self, contract_id: str, payment_status: str) -> None:
        stmt = (
            update(ContractModel)
            .where(ContractModel.id == contract_id)
            .values(payment_status=payment_status)
        )
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Failed to update payment status of contract {contract_id}: {e}") from e
