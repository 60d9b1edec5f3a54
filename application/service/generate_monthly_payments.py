import time
from datetime import date
from decimal import Decimal
from typing import Optional

from domain.entities import MonthlyPayment
from domain.exceptions import ScheduleAlreadyExistsError, StorageError, ValidationError
from domain.interfaces import ContractRepository, LoggingPort, MetricsPort, MonthlyPaymentRepository
from domain.services import build_schedule
from application.service.logging_utils import bind_logger
from application.service.payment_status import refresh_contract_payment_status


class GenerateMonthlyPaymentsService:
    def __init__(
        self,
        payment_repo: MonthlyPaymentRepository,
        contract_repo: Optional[ContractRepository] = None,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None,
    ):
        """
        Initialize the schedule generation service.

        Args:
            payment_repo: Repository persisting monthly payments (required)
            contract_repo: Repository for writing the aggregate payment status back (optional)
            metrics_port: Metrics port for emitting metrics (optional)
            logging_port: Logging port for structured logging (optional)
        """
        self.payment_repo = payment_repo
        self.contract_repo = contract_repo
        self.metrics_port = metrics_port
        self.logging_port = logging_port

    async def execute(
        self,
        contract_id: str,
        start_date: date,
        end_date: date,
        total_value: Decimal,
        replace_existing: bool = False,
        request_id: Optional[str] = None,
    ) -> list[MonthlyPayment]:
        """
        Generate and persist one pending installment per calendar month of the contract.

        Args:
            contract_id: ID of the contract
            start_date: First day covered by the contract
            end_date: Last day covered by the contract (inclusive)
            total_value: Contract total, split equally (last installment absorbs rounding)
            replace_existing: Delete the current schedule in the same transaction instead of rejecting
            request_id: ID of the request for tracing (optional)

        Raises:
            ValidationError: bad input, or a schedule already exists and replace_existing is False
            StorageError: the batch insert failed; nothing was written
        """
        start_time = time.time()
        log = bind_logger(
            self.logging_port,
            request_id=request_id or "unknown",
            contract_id=contract_id,
            step="schedule_generation",
        )
        log.info(
            "schedule_generation_started",
            start_date=str(start_date),
            end_date=str(end_date),
            total_value=str(total_value),
            replace_existing=replace_existing,
        )

        try:
            payments = build_schedule(contract_id, start_date, end_date, total_value)

            if not replace_existing and await self.payment_repo.has_schedule(contract_id):
                raise ScheduleAlreadyExistsError(contract_id)

            await self.payment_repo.save_schedule(contract_id, payments, replace_existing=replace_existing)
        except ValidationError as e:
            self._count("validation_error")
            log.warning("schedule_generation_rejected", error=str(e))
            raise
        except StorageError as e:
            self._count("storage_error")
            log.error("schedule_generation_failed", error=str(e), exc_info=True)
            raise

        self._count("success")
        if self.contract_repo:
            await refresh_contract_payment_status(self.contract_repo, self.payment_repo, contract_id, log)

        log.info(
            "schedule_generated",
            months=len(payments),
            first_period=payments[0].reference_period,
            last_period=payments[-1].reference_period,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return payments

    def _count(self, outcome: str) -> None:
        if self.metrics_port:
            self.metrics_port.increment_payment_operation(operation="generate", outcome=outcome)
