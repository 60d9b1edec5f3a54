"""
Domain exceptions for the rental back-office core.

Services raise these; routers translate them into HTTP responses.
"""


class RentalCoreError(Exception):
    """Base class for all core errors."""


class ValidationError(RentalCoreError):
    """Bad input (date range, amount, missing field). No side effect was attempted."""


class ScheduleAlreadyExistsError(ValidationError):
    """The contract already has a monthly payment schedule."""

    def __init__(self, contract_id: str):
        super().__init__(f"Contract {contract_id} already has a payment schedule")
        self.contract_id = contract_id


class NotFoundError(RentalCoreError):
    """The requested contract or payment does not exist."""


class StorageError(RentalCoreError):
    """Insert, update or delete failed in the data store."""


class NotificationPermissionError(RentalCoreError):
    """OS-level notifications are not permitted (denied or never granted)."""


class NotificationDeliveryError(RentalCoreError):
    """The push gateway did not accept a notification after retries."""
