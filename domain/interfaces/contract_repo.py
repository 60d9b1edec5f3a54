from datetime import date
from typing import Optional
from typing_extensions import Protocol

from domain.entities import Contract


class ContractRepository(Protocol):
    async def get_contract(self, contract_id: str) -> Optional[Contract]: ...
    async def list_active_contracts_ending_by(self, until: date) -> list[Contract]: ...
    async def update_payment_status(self, contract_id: str, payment_status: str) -> None: ...
