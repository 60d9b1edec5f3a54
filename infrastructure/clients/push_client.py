"""
Push gateway client for OS-level notifications.

Posts notification payloads to the push gateway (which fans them out to
registered service workers). Retries with exponential backoff using
tenacity and observes latency metrics.
"""
import time
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from domain.entities import NotificationEvent
from domain.exceptions import NotificationDeliveryError
from infrastructure.logging.structlog_logs import logger
from infrastructure.metrics.metrics import push_delivery_failures_total, push_delivery_latency_seconds

RETRYABLE_ERRORS = (httpx.HTTPStatusError, httpx.TimeoutException, httpx.RequestError)


class PushNotificationClient:
    """
    HTTP client for the push gateway.

    Uses tenacity for retries with exponential backoff:
    - max_retries: 3 (configurable), so at most 4 attempts
    - retries on non-2xx responses and network errors
    """

    def __init__(
        self,
        base_url: str,
        max_retries: int = 3,
        connect_timeout: float = 2.0,
        read_timeout: float = 5.0,
        icon: str = "/logo.png",
        backoff_min: float = 1.0,
        backoff_max: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the push client.

        Args:
            base_url: Base URL of the push gateway
            max_retries: Retries after the first attempt (default: 3)
            connect_timeout: Connection timeout in seconds (default: 2.0)
            read_timeout: Read timeout in seconds (default: 5.0)
            icon: Icon and badge path shown with the notification
            backoff_min: Lower bound of the exponential wait in seconds
            backoff_max: Upper bound of the exponential wait in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.icon = icon
        self.backoff_min = backoff_min
        self.backoff_max = backoff_max

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=connect_timeout,
                read=read_timeout,
                write=read_timeout,
                pool=connect_timeout,
            ),
            transport=transport,
        )

    def build_payload(self, event: NotificationEvent) -> dict[str, Any]:
        return {
            "title": event.title,
            "body": event.body,
            "icon": self.icon,
            "badge": self.icon,
            # Same tag replaces the previous notification instead of stacking
            "tag": event.tag,
            "require_interaction": event.urgent,
            "data": {"url": event.url, "kind": event.kind, "subject_id": event.subject_id},
        }

    async def _post_once(self, payload: dict[str, Any]) -> int:
        start_time = time.time()
        try:
            response = await self._client.post(f"{self.base_url}/notifications", json=payload)
            response.raise_for_status()
            return response.status_code
        finally:
            push_delivery_latency_seconds.observe(time.time() - start_time)

    async def send(self, event: NotificationEvent) -> int:
        """
        Deliver one notification.

        Returns:
            Number of attempts it took

        Raises:
            NotificationDeliveryError: every attempt failed
        """
        log = logger.bind(tag=event.tag, step="push_send")
        payload = self.build_payload(event)
        attempts = 0

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries + 1),
                wait=wait_exponential(multiplier=1, min=self.backoff_min, max=self.backoff_max),
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                reraise=False,
            ):
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    status_code = await self._post_once(payload)
        except RetryError as e:
            push_delivery_failures_total.inc()
            last_error = e.last_attempt.exception() if e.last_attempt else e
            log.error("push_failed_after_retries", attempts=attempts, error=str(last_error))
            raise NotificationDeliveryError(
                f"Push gateway rejected notification {event.tag} after {attempts} attempts: {last_error}"
            ) from e

        log.info("push_sent", status_code=status_code, attempts=attempts)
        return attempts

    async def close(self):
        """Close the httpx client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
