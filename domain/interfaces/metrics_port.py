from typing_extensions import Protocol


class MetricsPort(Protocol):
    """Protocol for metrics operations."""

    def increment_payment_operation(self, operation: str, outcome: str) -> None:
        """
        Increment the payment_operations_total counter.

        Args:
            operation: One of "generate", "update", "mark_paid", "delete"
            outcome: One of "success", "validation_error", "not_found", "storage_error"
        """
        ...

    def increment_notification_cycle(self, outcome: str) -> None:
        """
        Increment the notification_cycles_total counter.

        Args:
            outcome: One of "sent", "skipped", "error"
        """
        ...

    def increment_notification_emitted(self, kind: str, urgent: bool) -> None:
        """
        Increment the notifications_emitted_total counter.

        Args:
            kind: "contract_expiry" or "payment_due"
            urgent: Whether the event was classified urgent
        """
        ...
