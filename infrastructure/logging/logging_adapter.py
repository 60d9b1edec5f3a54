"""
Logging adapter that implements LoggingPort on top of structlog.

Services depend on LoggingPort only; this is the one place that knows
events end up as JSON lines through structlog.
"""
from typing import Any
from domain.interfaces import LoggingPort, BoundLogger
from infrastructure.logging.structlog_logs import logger as structlog_logger


class StructlogBoundLogger:
    """BoundLogger backed by a structlog bound logger."""

    def __init__(self, bound_logger):
        self._logger = bound_logger

    def debug(self, event: str, **kwargs: Any) -> None:
        self._logger.debug(event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._logger.warning(event, **kwargs)

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._logger.error(event, exc_info=exc_info, **kwargs)

    def bind(self, **kwargs: Any) -> BoundLogger:
        return StructlogBoundLogger(self._logger.bind(**kwargs))


class LoggingAdapter(LoggingPort):
    """
    Adapter that implements LoggingPort for structured logging.

    Args passed to bind() become fields of every event logged through
    the returned logger, e.g. bind(contract_id=...) for schedule work.
    """

    def __init__(self, **base_context: Any):
        self._base_context = base_context

    def bind(self, **kwargs: Any) -> BoundLogger:
        bound_logger = structlog_logger.bind(**self._base_context, **kwargs)
        return StructlogBoundLogger(bound_logger)
