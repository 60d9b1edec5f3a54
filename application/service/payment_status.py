from domain.exceptions import StorageError
from domain.interfaces import BoundLogger, ContractRepository, MonthlyPaymentRepository
from domain.services import aggregate_payment_status


async def refresh_contract_payment_status(
    contract_repo: ContractRepository,
    payment_repo: MonthlyPaymentRepository,
    contract_id: str,
    log: BoundLogger,
) -> None:
    """
    Write the contract's aggregate payment status back (pending/partial/paid).

    The payment change that triggered this is already committed, so a
    failure here is logged and not raised.
    """
    try:
        payments = await payment_repo.list_contract_payments(contract_id)
        payment_status = aggregate_payment_status(payments)
        await contract_repo.update_payment_status(contract_id, payment_status)
    except StorageError as e:
        log.error("contract_payment_status_update_failed", step="aggregate", error=str(e))
        return
    log.info("contract_payment_status_updated", step="aggregate", payment_status=payment_status)
