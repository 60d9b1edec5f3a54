from datetime import date
from typing import Optional
from typing_extensions import Protocol

from domain.entities import Contract, MonthlyPayment


class MonthlyPaymentRepository(Protocol):
    async def has_schedule(self, contract_id: str) -> bool: ...

    async def save_schedule(
        self,
        contract_id: str,
        payments: list[MonthlyPayment],
        replace_existing: bool = False,
    ) -> list[MonthlyPayment]:
        """
        Insert all rows in one transaction.

        When replace_existing is True the contract's current rows are deleted
        in the same transaction. Nothing is written if any statement fails.
        """
        ...

    async def get_payment(self, payment_id: str) -> Optional[MonthlyPayment]: ...
    async def update_payment(self, payment: MonthlyPayment) -> MonthlyPayment: ...
    async def delete_payment(self, payment_id: str) -> bool: ...
    async def list_contract_payments(self, contract_id: str) -> list[MonthlyPayment]: ...
    async def list_payments_due_between(self, start: date, end: date) -> list[tuple[MonthlyPayment, Contract]]: ...
    async def list_pending_payments_due_between(self, start: date, end: date) -> list[tuple[MonthlyPayment, Contract]]:
        """Pending rows of active contracts due in the inclusive window."""
        ...
