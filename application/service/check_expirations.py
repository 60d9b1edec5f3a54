import time
from datetime import date, timedelta
from typing import Optional

from domain.config import NotificationConfig, get_notification_config
from domain.entities import NotificationEvent
from domain.exceptions import NotificationDeliveryError, NotificationPermissionError
from domain.interfaces import (
    ContractRepository,
    LoggingPort,
    MetricsPort,
    MonthlyPaymentRepository,
    NotificationPort,
    SettingsRepository,
    ToastPort,
)
from domain.services import classify_contract_expiry, classify_payment_due
from application.service.logging_utils import bind_logger


class CheckExpirationsService:
    """
    One notification check cycle.

    Nothing is acknowledged or snoozed: every cycle re-evaluates from
    scratch, so a contract keeps notifying until its status changes or it
    leaves the lookahead window.
    """

    def __init__(
        self,
        settings_repo: SettingsRepository,
        contract_repo: ContractRepository,
        payment_repo: MonthlyPaymentRepository,
        notification_port: NotificationPort,
        toast_port: ToastPort,
        config: Optional[NotificationConfig] = None,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None,
    ):
        self.settings_repo = settings_repo
        self.contract_repo = contract_repo
        self.payment_repo = payment_repo
        self.notification_port = notification_port
        self.toast_port = toast_port
        self.config = config or get_notification_config()
        self.metrics_port = metrics_port
        self.logging_port = logging_port

    async def execute(self, today: Optional[date] = None) -> list[NotificationEvent]:
        """
        Run one cycle and return the events that were emitted.

        Returns an empty list without querying contracts or payments when
        notifications are disabled.
        """
        start_time = time.time()
        log = bind_logger(self.logging_port, step="notification_cycle")

        settings = await self.settings_repo.get_notification_settings()
        if not settings.enabled:
            log.debug("notification_cycle_skipped", reason="notifications_disabled")
            if self.metrics_port:
                self.metrics_port.increment_notification_cycle(outcome="skipped")
            return []

        today = today or date.today()
        contracts = await self.contract_repo.list_active_contracts_ending_by(
            today + timedelta(days=self.config.contract_lookahead_days)
        )
        due_payments = await self.payment_repo.list_pending_payments_due_between(
            today, today + timedelta(days=self.config.payment_lookahead_days)
        )

        events = [
            classify_contract_expiry(contract, today, urgent_days=self.config.contract_urgent_days)
            for contract in contracts
        ]
        events.extend(
            classify_payment_due(payment, contract, today, urgent_days=self.config.payment_urgent_days)
            for payment, contract in due_payments
        )

        push_allowed = True
        for event in events:
            if push_allowed:
                try:
                    await self.notification_port.show_notification(event)
                except NotificationPermissionError as e:
                    # Degraded mode: toasts only for the rest of the cycle
                    push_allowed = False
                    log.info("push_permission_not_granted", reason=str(e))
                except NotificationDeliveryError as e:
                    log.warning("push_delivery_failed", tag=event.tag, error=str(e))

            self.toast_port.show_toast(event)
            if self.metrics_port:
                self.metrics_port.increment_notification_emitted(kind=event.kind, urgent=event.urgent)

        if self.metrics_port:
            self.metrics_port.increment_notification_cycle(outcome="sent")
        log.info(
            "notification_cycle_completed",
            contracts=len(contracts),
            payments=len(due_payments),
            urgent=sum(1 for e in events if e.urgent),
            push_allowed=push_allowed,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return events
