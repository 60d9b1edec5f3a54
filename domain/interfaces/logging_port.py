from typing_extensions import Protocol
from typing import Any


class BoundLogger(Protocol):
    """Protocol for a logger carrying bound context (contract_id, payment_id, step...)."""

    def debug(self, event: str, **kwargs: Any) -> None: ...

    def info(self, event: str, **kwargs: Any) -> None: ...

    def warning(self, event: str, **kwargs: Any) -> None: ...

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        """
        Log an error event.

        Args:
            event: snake_case event name
            exc_info: Attach the active exception's traceback
            **kwargs: Extra context fields
        """
        ...

    def bind(self, **kwargs: Any) -> "BoundLogger":
        """Return a child logger with extra context fields."""
        ...


class LoggingPort(Protocol):
    """Protocol for structured logging."""

    def bind(self, **kwargs: Any) -> BoundLogger:
        """
        Create a bound logger.

        Args:
            **kwargs: Context fields attached to every event

        Returns:
            A bound logger with the given context
        """
        ...
