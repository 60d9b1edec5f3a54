"""
Tests for the expiry notification scheduler lifecycle.
"""
import asyncio

import pytest

from application.scheduler import ExpiryNotificationScheduler
from domain.interfaces import MetricsPort


class _CountingCheck:
    def __init__(self, fail=False):
        self.calls = 0
        self.fail = fail

    async def __call__(self):
        self.calls += 1
        if self.fail:
            raise RuntimeError("database unavailable")


async def _wait_for(predicate, timeout=1.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


@pytest.mark.asyncio
async def test_start_runs_first_check_immediately():
    check = _CountingCheck()
    scheduler = ExpiryNotificationScheduler(check, interval_seconds=3600)

    scheduler.start()
    await _wait_for(lambda: check.calls == 1)

    assert scheduler.is_running is True
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_double_start_keeps_one_timer():
    check = _CountingCheck()
    scheduler = ExpiryNotificationScheduler(check, interval_seconds=3600)

    first = scheduler.start()
    second = scheduler.start()
    await _wait_for(lambda: check.calls >= 1)
    await asyncio.sleep(0.02)

    assert first is second
    assert check.calls == 1
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_repeats_every_interval():
    check = _CountingCheck()
    scheduler = ExpiryNotificationScheduler(check, interval_seconds=0.01)

    scheduler.start()
    await _wait_for(lambda: check.calls >= 3)
    await scheduler.aclose()

    calls = check.calls
    await asyncio.sleep(0.03)
    assert check.calls == calls


@pytest.mark.asyncio
async def test_stop_is_idempotent():
    scheduler = ExpiryNotificationScheduler(_CountingCheck(), interval_seconds=3600)

    scheduler.stop()
    handle = scheduler.start()
    scheduler.stop(handle)
    scheduler.stop(handle)
    scheduler.stop()

    assert scheduler.is_running is False
    assert scheduler.handle is None
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_stale_handle_does_not_stop_new_timer():
    scheduler = ExpiryNotificationScheduler(_CountingCheck(), interval_seconds=3600)

    old = scheduler.start()
    scheduler.stop()
    scheduler.start()
    scheduler.stop(old)

    assert scheduler.is_running is True
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_failed_cycle_keeps_timer_alive(mocker):
    check = _CountingCheck(fail=True)
    metrics = mocker.MagicMock(spec=MetricsPort)
    scheduler = ExpiryNotificationScheduler(check, interval_seconds=0.01, metrics_port=metrics)

    scheduler.start()
    await _wait_for(lambda: check.calls >= 2)

    assert scheduler.is_running is True
    metrics.increment_notification_cycle.assert_called_with(outcome="error")
    await scheduler.aclose()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        ExpiryNotificationScheduler(_CountingCheck(), interval_seconds=0)
