from typing import Any, Optional

from domain.interfaces import BoundLogger, LoggingPort


class NoOpLogger:
    """Logger used when no LoggingPort is wired (unit tests)."""

    def debug(self, event: str, **kwargs: Any) -> None: pass
    def info(self, event: str, **kwargs: Any) -> None: pass
    def warning(self, event: str, **kwargs: Any) -> None: pass
    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None: pass

    def bind(self, **kwargs: Any) -> "NoOpLogger":
        return self


def bind_logger(logging_port: Optional[LoggingPort], **context: Any) -> BoundLogger:
    if logging_port is None:
        return NoOpLogger()
    return logging_port.bind(**context)
