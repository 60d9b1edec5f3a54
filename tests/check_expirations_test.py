"""
Tests for one notification check cycle.

Tests verify:
- Disabled notifications short-circuit before any contract/payment query
- Events go to both push and toast when permission is granted
- Permission denied degrades to toasts only
- A rejected push does not stop the cycle
"""
from datetime import date
from decimal import Decimal

import pytest

from application.service.check_expirations import CheckExpirationsService
from domain.config import NotificationConfig
from domain.entities import Contract, MonthlyPayment, NotificationSettings
from domain.exceptions import NotificationDeliveryError, NotificationPermissionError
from domain.interfaces import (
    ContractRepository,
    MetricsPort,
    MonthlyPaymentRepository,
    NotificationPort,
    SettingsRepository,
)
from infrastructure.notifications import InMemoryToastFeed

TODAY = date(2024, 6, 10)


def _contract(contract_id, end_date):
    return Contract(
        id=contract_id,
        number=f"CT-{contract_id}",
        start_date=date(2024, 1, 1),
        end_date=end_date,
        total_value=Decimal("6000.00"),
        status="active",
        client_name="Maria Souza",
    )


@pytest.fixture
def config():
    return NotificationConfig(
        check_interval_seconds=3600,
        contract_lookahead_days=7,
        payment_lookahead_days=5,
        contract_urgent_days=3,
        payment_urgent_days=2,
    )


@pytest.fixture
def settings_repo(mocker):
    repo = mocker.AsyncMock(spec=SettingsRepository)
    repo.get_notification_settings.return_value = NotificationSettings(enabled=True, permission="granted")
    return repo


@pytest.fixture
def contract_repo(mocker):
    repo = mocker.AsyncMock(spec=ContractRepository)
    repo.list_active_contracts_ending_by.return_value = [
        _contract("1", date(2024, 6, 8)),
        _contract("2", date(2024, 6, 15)),
    ]
    return repo


@pytest.fixture
def payment_repo(mocker):
    repo = mocker.AsyncMock(spec=MonthlyPaymentRepository)
    payment = MonthlyPayment.create("3", "2024-06", Decimal("500.00"), date(2024, 6, 12))
    repo.list_pending_payments_due_between.return_value = [(payment, _contract("3", date(2024, 12, 31)))]
    return repo


@pytest.fixture
def notification_port(mocker):
    return mocker.AsyncMock(spec=NotificationPort)


@pytest.fixture
def metrics(mocker):
    return mocker.MagicMock(spec=MetricsPort)


def _service(settings_repo, contract_repo, payment_repo, notification_port, toast_feed, config, metrics=None):
    return CheckExpirationsService(
        settings_repo=settings_repo,
        contract_repo=contract_repo,
        payment_repo=payment_repo,
        notification_port=notification_port,
        toast_port=toast_feed,
        config=config,
        metrics_port=metrics,
    )


@pytest.mark.asyncio
async def test_disabled_issues_no_queries(settings_repo, contract_repo, payment_repo, notification_port, config, metrics):
    settings_repo.get_notification_settings.return_value = NotificationSettings(enabled=False)
    toasts = InMemoryToastFeed()
    service = _service(settings_repo, contract_repo, payment_repo, notification_port, toasts, config, metrics)

    events = await service.execute(today=TODAY)

    assert events == []
    contract_repo.list_active_contracts_ending_by.assert_not_awaited()
    payment_repo.list_pending_payments_due_between.assert_not_awaited()
    notification_port.show_notification.assert_not_awaited()
    assert len(toasts) == 0
    metrics.increment_notification_cycle.assert_called_once_with(outcome="skipped")


@pytest.mark.asyncio
async def test_queries_use_lookahead_windows(settings_repo, contract_repo, payment_repo, notification_port, config):
    service = _service(settings_repo, contract_repo, payment_repo, notification_port, InMemoryToastFeed(), config)

    await service.execute(today=TODAY)

    contract_repo.list_active_contracts_ending_by.assert_awaited_once_with(date(2024, 6, 17))
    payment_repo.list_pending_payments_due_between.assert_awaited_once_with(TODAY, date(2024, 6, 15))


@pytest.mark.asyncio
async def test_events_go_to_push_and_toast(settings_repo, contract_repo, payment_repo, notification_port, config, metrics):
    toasts = InMemoryToastFeed()
    service = _service(settings_repo, contract_repo, payment_repo, notification_port, toasts, config, metrics)

    events = await service.execute(today=TODAY)

    assert [e.tag for e in events] == ["contract-1", "contract-2", f"payment-{events[2].subject_id}"]
    assert [e.urgent for e in events] == [True, False, True]
    assert notification_port.show_notification.await_count == 3
    assert len(toasts) == 3
    assert "expired 2 days ago" in toasts.recent()[-1].body
    metrics.increment_notification_cycle.assert_called_once_with(outcome="sent")
    assert metrics.increment_notification_emitted.call_count == 3


@pytest.mark.asyncio
async def test_permission_denied_keeps_toasts(settings_repo, contract_repo, payment_repo, notification_port, config):
    notification_port.show_notification.side_effect = NotificationPermissionError("denied")
    toasts = InMemoryToastFeed()
    service = _service(settings_repo, contract_repo, payment_repo, notification_port, toasts, config)

    events = await service.execute(today=TODAY)

    assert len(events) == 3
    assert len(toasts) == 3
    # Stops trying push after the first refusal
    assert notification_port.show_notification.await_count == 1


@pytest.mark.asyncio
async def test_delivery_failure_does_not_stop_cycle(settings_repo, contract_repo, payment_repo, notification_port, config):
    notification_port.show_notification.side_effect = [NotificationDeliveryError("gateway down"), None, None]
    toasts = InMemoryToastFeed()
    service = _service(settings_repo, contract_repo, payment_repo, notification_port, toasts, config)

    events = await service.execute(today=TODAY)

    assert len(events) == 3
    assert notification_port.show_notification.await_count == 3
    assert len(toasts) == 3


@pytest.mark.asyncio
async def test_nothing_due(settings_repo, contract_repo, payment_repo, notification_port, config):
    contract_repo.list_active_contracts_ending_by.return_value = []
    payment_repo.list_pending_payments_due_between.return_value = []
    toasts = InMemoryToastFeed()
    service = _service(settings_repo, contract_repo, payment_repo, notification_port, toasts, config)

    assert await service.execute(today=TODAY) == []
    notification_port.show_notification.assert_not_awaited()
    assert len(toasts) == 0
