from dataclasses import dataclass
from datetime import date
from typing import Optional

from domain.entities import Contract, MonthlyPayment
from domain.exceptions import NotFoundError
from domain.interfaces import ContractRepository, MonthlyPaymentRepository
from domain.services import PaymentSummary, summarize_payments


@dataclass
class ContractPayments:
    contract: Contract
    payments: list[MonthlyPayment]
    summary: PaymentSummary
    as_of: date


class ListContractPaymentsService:
    def __init__(self, contract_repo: ContractRepository, payment_repo: MonthlyPaymentRepository):
        self.contract_repo = contract_repo
        self.payment_repo = payment_repo

    async def execute(self, contract_id: str, today: Optional[date] = None) -> ContractPayments:
        """Get a contract's schedule ordered by due date, with a summary."""
        today = today or date.today()
        contract = await self.contract_repo.get_contract(contract_id)
        if contract is None:
            raise NotFoundError(f"Contract {contract_id} not found")

        payments = await self.payment_repo.list_contract_payments(contract_id)
        return ContractPayments(
            contract=contract,
            payments=payments,
            summary=summarize_payments(payments, today),
            as_of=today,
        )
