"""
Expiry Notification Scheduler

Owns the repeating timer that runs the notification check cycle. One
instance is built in the application's composition root and started and
stopped with the app lifespan.
"""
import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional
from uuid import uuid4

from domain.interfaces import LoggingPort, MetricsPort
from application.service.logging_utils import bind_logger

DEFAULT_INTERVAL_SECONDS = 60 * 60


@dataclass(frozen=True)
class SchedulerHandle:
    id: str
    task: asyncio.Task

    @property
    def active(self) -> bool:
        return not self.task.done()


class ExpiryNotificationScheduler:
    def __init__(
        self,
        check: Callable[[], Awaitable[object]],
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None,
    ):
        """
        Args:
            check: Coroutine function running one check cycle
            interval_seconds: Delay between the end of one cycle and the start of the next
            metrics_port: Metrics port for counting failed cycles (optional)
            logging_port: Logging port for structured logging (optional)
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.check = check
        self.interval_seconds = interval_seconds
        self.metrics_port = metrics_port
        self.log = bind_logger(logging_port, step="notification_scheduler")
        self._handle: Optional[SchedulerHandle] = None

    @property
    def handle(self) -> Optional[SchedulerHandle]:
        return self._handle

    @property
    def is_running(self) -> bool:
        return self._handle is not None and self._handle.active

    def start(self) -> SchedulerHandle:
        """
        Start the timer: one check right away, then one per interval.

        Calling start() while running returns the existing handle and does
        not create a second timer. Must be called from a running event loop.
        """
        if self.is_running:
            self.log.info("scheduler_already_running", handle_id=self._handle.id)
            return self._handle

        task = asyncio.get_running_loop().create_task(self._run(), name="expiry-notification-scheduler")
        self._handle = SchedulerHandle(id=str(uuid4()), task=task)
        self.log.info("scheduler_started", handle_id=self._handle.id, interval_seconds=self.interval_seconds)
        return self._handle

    def stop(self, handle: Optional[SchedulerHandle] = None) -> None:
        """Cancel the timer. No-op when already stopped or when handle is stale."""
        current = self._handle
        if current is None:
            return
        if handle is not None and handle.id != current.id:
            return

        current.task.cancel()
        self._handle = None
        self.log.info("scheduler_stopped", handle_id=current.id)

    async def aclose(self) -> None:
        """Stop and wait for the timer task to finish unwinding."""
        current = self._handle
        self.stop()
        if current is not None:
            try:
                await current.task
            except asyncio.CancelledError:
                pass

    async def run_once(self) -> bool:
        """Run one cycle. Failures are logged and counted; the timer keeps going."""
        try:
            await self.check()
        except Exception as e:
            self.log.error("notification_cycle_failed", error=str(e), exc_info=True)
            if self.metrics_port:
                self.metrics_port.increment_notification_cycle(outcome="error")
            return False
        return True

    async def _run(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self.interval_seconds)
