from typing import Optional

from domain.exceptions import NotFoundError, StorageError
from domain.interfaces import ContractRepository, LoggingPort, MetricsPort, MonthlyPaymentRepository
from application.service.logging_utils import bind_logger
from application.service.payment_status import refresh_contract_payment_status


class DeleteMonthlyPaymentService:
    def __init__(
        self,
        payment_repo: MonthlyPaymentRepository,
        contract_repo: Optional[ContractRepository] = None,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None,
    ):
        self.payment_repo = payment_repo
        self.contract_repo = contract_repo
        self.metrics_port = metrics_port
        self.logging_port = logging_port

    async def execute(self, payment_id: str) -> None:
        """Remove exactly one row. The rest of the schedule is left as is."""
        log = bind_logger(self.logging_port, payment_id=payment_id, step="delete")

        try:
            payment = await self.payment_repo.get_payment(payment_id)
            if payment is None or not await self.payment_repo.delete_payment(payment_id):
                raise NotFoundError(f"Monthly payment {payment_id} not found")
        except NotFoundError:
            self._count("not_found")
            log.warning("payment_not_found")
            raise
        except StorageError as e:
            self._count("storage_error")
            log.error("payment_delete_failed", error=str(e), exc_info=True)
            raise

        self._count("success")
        log.info("payment_deleted", contract_id=payment.contract_id, reference_period=payment.reference_period)
        if self.contract_repo:
            await refresh_contract_payment_status(self.contract_repo, self.payment_repo, payment.contract_id, log)

    def _count(self, outcome: str) -> None:
        if self.metrics_port:
            self.metrics_port.increment_payment_operation(operation="delete", outcome=outcome)
