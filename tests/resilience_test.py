"""
Resilience tests for push gateway and storage failures.

Tests verify:
- Push gateway failures trigger retries and record attempts
- Exhausted retries raise NotificationDeliveryError and increment push_delivery_failures_total
- The push sink refuses to deliver without a granted permission
- Storage failures on generation return HTTP 500 with an error body
"""
import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import status
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from app.main import app
from domain.entities import NotificationEvent, NotificationSettings
from domain.exceptions import NotificationDeliveryError, NotificationPermissionError, StorageError
from infrastructure.clients import PushNotificationClient, PushNotificationSink

OPERATOR = '{"id": "u-1", "name": "Ana", "email": "ana@example.com", "role": "operator"}'


def _event(urgent=True):
    return NotificationEvent(
        kind="contract_expiry",
        subject_id="c-1",
        contract_id="c-1",
        title="Contract expiring",
        body="Contract CT-001 expires in 2 days",
        days_until=2,
        urgent=urgent,
        tag="contract-c-1",
        url="/contracts/c-1",
    )


def _client(handler, max_retries=3):
    return PushNotificationClient(
        base_url="http://push.test/",
        max_retries=max_retries,
        backoff_min=0,
        backoff_max=0,
        transport=httpx.MockTransport(handler),
    )


def _failures() -> float:
    return REGISTRY.get_sample_value("push_delivery_failures_total") or 0.0


class TestPushClient:

    @pytest.mark.asyncio
    async def test_payload_and_endpoint(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(202)

        async with _client(handler) as client:
            attempts = await client.send(_event())

        assert attempts == 1
        assert str(seen[0].url) == "http://push.test/notifications"
        body = json.loads(seen[0].content)
        assert body["tag"] == "contract-c-1"
        assert body["require_interaction"] is True
        assert body["icon"] == "/logo.png"
        assert body["data"] == {"url": "/contracts/c-1", "kind": "contract_expiry", "subject_id": "c-1"}

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        responses = iter([httpx.Response(503), httpx.Response(500), httpx.Response(200)])

        async with _client(lambda request: next(responses)) as client:
            attempts = await client.send(_event())

        assert attempts == 3

    @pytest.mark.asyncio
    async def test_network_error_is_retried(self):
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            if calls["n"] == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200)

        async with _client(handler) as client:
            assert await client.send(_event()) == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_and_count(self):
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            return httpx.Response(500)

        before = _failures()
        async with _client(handler, max_retries=2) as client:
            with pytest.raises(NotificationDeliveryError):
                await client.send(_event())

        assert calls["n"] == 3
        assert _failures() == before + 1


class TestPushSink:

    @pytest.mark.asyncio
    async def test_denied_permission_raises(self, mocker):
        settings_repo = mocker.AsyncMock()
        settings_repo.get_notification_settings.return_value = NotificationSettings(enabled=True, permission="denied")
        push_client = mocker.AsyncMock(spec=PushNotificationClient)

        sink = PushNotificationSink(push_client, settings_repo)
        with pytest.raises(NotificationPermissionError):
            await sink.show_notification(_event())

        push_client.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_permission_read_once_per_sink(self, mocker):
        settings_repo = mocker.AsyncMock()
        settings_repo.get_notification_settings.return_value = NotificationSettings(enabled=True, permission="granted")
        push_client = mocker.AsyncMock(spec=PushNotificationClient)

        sink = PushNotificationSink(push_client, settings_repo)
        await sink.show_notification(_event())
        await sink.show_notification(_event(urgent=False))

        assert push_client.send.await_count == 2
        settings_repo.get_notification_settings.assert_awaited_once()


class TestStorageFailure:

    def test_generate_storage_error_returns_500(self):
        with patch('app.routers.v1.MonthlyPaymentRepoSqlalchemy') as mock_payment_repo_class, \
             patch('app.routers.v1.ContractRepoSqlalchemy') as mock_contract_repo_class:

            mock_payment_repo = AsyncMock()
            mock_payment_repo.has_schedule.return_value = False
            mock_payment_repo.save_schedule.side_effect = StorageError("insert failed")
            mock_payment_repo_class.return_value = mock_payment_repo
            mock_contract_repo_class.return_value = AsyncMock()

            response = TestClient(app).post(
                "/v1/generate-monthly-payments",
                json={
                    "contratoId": "c-1",
                    "dataInicio": "2024-01-15",
                    "dataFim": "2024-04-15",
                    "valorTotal": 12000,
                },
                headers={"X-User-Profile": OPERATOR},
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "insert failed"}
