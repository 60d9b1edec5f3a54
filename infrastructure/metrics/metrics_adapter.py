"""
Metrics adapter that implements MetricsPort on top of the Prometheus counters.
"""
from domain.interfaces import MetricsPort
from infrastructure.metrics.metrics import (
    payment_operations_total,
    notification_cycles_total,
    notifications_emitted_total,
)


class MetricsAdapter(MetricsPort):
    """Adapter that increments the Prometheus metrics exposed on /metrics."""

    def increment_payment_operation(self, operation: str, outcome: str) -> None:
        payment_operations_total.labels(operation=operation, outcome=outcome).inc()

    def increment_notification_cycle(self, outcome: str) -> None:
        notification_cycles_total.labels(outcome=outcome).inc()

    def increment_notification_emitted(self, kind: str, urgent: bool) -> None:
        notifications_emitted_total.labels(kind=kind, urgent=str(urgent).lower()).inc()
