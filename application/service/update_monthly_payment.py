from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from domain.entities import MonthlyPayment, PaymentStatus
from domain.entities.monthly_payment import STORED_STATUSES
from domain.exceptions import NotFoundError, StorageError, ValidationError
from domain.interfaces import ContractRepository, LoggingPort, MetricsPort, MonthlyPaymentRepository
from domain.services.schedule import has_cent_precision
from application.service.logging_utils import bind_logger
from application.service.payment_status import refresh_contract_payment_status


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Distinguishes "leave unchanged" from an explicit None (e.g. clearing paid_date)
UNSET: Any = _Unset()


class UpdateMonthlyPaymentService:
    """
    Partial edit of a single monthly payment.

    Only supplied fields change. A row that ends up paid without a paid
    date (omitted or sent as null) gets today's date; moving away from
    paid keeps the paid date unless the caller clears it explicitly.
    """

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

    async def execute(
        self,
        payment_id: str,
        *,
        amount: Any = UNSET,
        due_date: Any = UNSET,
        paid_date: Any = UNSET,
        status: Any = UNSET,
        today: Optional[date] = None,
        operation: str = "update",
    ) -> MonthlyPayment:
        today = today or date.today()
        log = bind_logger(self.logging_port, payment_id=payment_id, step=operation)

        try:
            payment = await self.payment_repo.get_payment(payment_id)
            if payment is None:
                raise NotFoundError(f"Monthly payment {payment_id} not found")

            if amount is not UNSET:
                if amount is None or Decimal(amount) < 0:
                    raise ValidationError("amount must be greater than or equal to zero")
                if not has_cent_precision(Decimal(amount)):
                    raise ValidationError("amount must have at most 2 decimal places")
                payment.amount = Decimal(amount)

            if due_date is not UNSET:
                if due_date is None:
                    raise ValidationError("due date is required")
                payment.due_date = due_date

            if paid_date is not UNSET:
                payment.paid_date = paid_date

            if status is not UNSET:
                status = status.value if isinstance(status, PaymentStatus) else status
                if status == PaymentStatus.OVERDUE.value:
                    raise ValidationError("overdue is derived from the due date and cannot be set")
                if status not in STORED_STATUSES:
                    raise ValidationError(f"unknown payment status: {status}")
                payment.status = status

            # A paid row always carries a paid date
            if payment.status == PaymentStatus.PAID.value and payment.paid_date is None:
                payment.paid_date = today

            payment.updated_at = datetime.now()
            updated = await self.payment_repo.update_payment(payment)
        except NotFoundError:
            self._count(operation, "not_found")
            log.warning("payment_not_found")
            raise
        except ValidationError as e:
            self._count(operation, "validation_error")
            log.warning("payment_update_rejected", error=str(e))
            raise
        except StorageError as e:
            self._count(operation, "storage_error")
            log.error("payment_update_failed", error=str(e), exc_info=True)
            raise

        self._count(operation, "success")
        log.info(
            "payment_updated",
            contract_id=updated.contract_id,
            status=updated.status,
            paid_date=str(updated.paid_date) if updated.paid_date else None,
        )
        if self.contract_repo:
            await refresh_contract_payment_status(self.contract_repo, self.payment_repo, updated.contract_id, log)
        return updated

    def _count(self, operation: str, outcome: str) -> None:
        if self.metrics_port:
            self.metrics_port.increment_payment_operation(operation=operation, outcome=outcome)


class MarkPaymentPaidService:
    """Shortcut for update(status=paid, paid_date=today)."""

    def __init__(self, update_service: UpdateMonthlyPaymentService):
        self.update_service = update_service

    async def execute(self, payment_id: str, today: Optional[date] = None) -> MonthlyPayment:
        today = today or date.today()
        return await self.update_service.execute(
            payment_id,
            status=PaymentStatus.PAID.value,
            paid_date=today,
            today=today,
            operation="mark_paid",
        )
