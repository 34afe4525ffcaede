from __future__ import annotations

import asyncio
from typing import Any

import pytest

from inventorywatch.config import PollConfig
from inventorywatch.scheduler import PollScheduler, SchedulerState


class ManualSleep:
    """Sleep replacement that only returns when the test calls :meth:`elapse`."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self._waiters: list[asyncio.Future[None]] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        await waiter

    def elapse(self) -> None:
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)


class CountingFetcher:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls = 0
        self.error = error
        self.closed = False

    async def run_cycle(self) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return None

    async def aclose(self) -> None:
        self.closed = True


class CountingChecker:
    def __init__(self) -> None:
        self.calls = 0

    async def check(self) -> None:
        self.calls += 1


class ConfigHolder:
    def __init__(self, config: PollConfig) -> None:
        self.config = config

    def __call__(self) -> PollConfig:
        return self.config


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


def _scheduler(
    fetcher: CountingFetcher,
    holder: ConfigHolder,
    sleep: ManualSleep,
    checker: CountingChecker | None = None,
) -> PollScheduler:
    return PollScheduler(fetcher, holder, version_checker=checker, sleep=sleep)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_start_fires_immediately_and_arms() -> None:
    fetcher, sleep = CountingFetcher(), ManualSleep()
    scheduler = _scheduler(fetcher, ConfigHolder(PollConfig()), sleep)
    assert scheduler.state is SchedulerState.IDLE

    scheduler.start()
    await _settle()

    assert fetcher.calls == 1
    assert scheduler.state is SchedulerState.ARMED
    assert scheduler.armed_interval_minutes == 1
    assert sleep.delays == [60.0]
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_each_interval_fires_again() -> None:
    fetcher, sleep, checker = CountingFetcher(), ManualSleep(), CountingChecker()
    scheduler = _scheduler(fetcher, ConfigHolder(PollConfig(update_interval_minutes=2)), sleep, checker)

    scheduler.start()
    await _settle()
    sleep.elapse()
    await _settle()
    sleep.elapse()
    await _settle()

    assert fetcher.calls == 3
    assert checker.calls == 3
    assert sleep.delays == [120.0, 120.0, 120.0]
    assert scheduler.state is SchedulerState.ARMED
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_interval_change_rearms_on_next_fire() -> None:
    fetcher, sleep = CountingFetcher(), ManualSleep()
    holder = ConfigHolder(PollConfig())
    scheduler = _scheduler(fetcher, holder, sleep)
    scheduler.start()
    await _settle()

    holder.config = holder.config.replace(update_interval_minutes=5)
    sleep.elapse()
    await _settle()

    assert fetcher.calls == 2
    assert scheduler.armed_interval_minutes == 5
    assert sleep.delays[-1] == 300.0
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_refresh_interval_rearms_without_firing() -> None:
    fetcher, sleep = CountingFetcher(), ManualSleep()
    holder = ConfigHolder(PollConfig())
    scheduler = _scheduler(fetcher, holder, sleep)
    scheduler.start()
    await _settle()

    assert scheduler.refresh_interval() is False
    holder.config = holder.config.replace(update_interval_minutes=10)
    assert scheduler.refresh_interval() is True
    await _settle()

    assert fetcher.calls == 1
    assert scheduler.armed_interval_minutes == 10
    assert sleep.delays == [60.0, 600.0]
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_refresh_interval_while_idle_does_nothing() -> None:
    scheduler = _scheduler(CountingFetcher(), ConfigHolder(PollConfig()), ManualSleep())

    assert scheduler.refresh_interval() is False
    assert scheduler.state is SchedulerState.IDLE


@pytest.mark.asyncio
async def test_manual_trigger_fires_without_rearming() -> None:
    fetcher, sleep = CountingFetcher(), ManualSleep()
    scheduler = _scheduler(fetcher, ConfigHolder(PollConfig()), sleep)
    scheduler.start()
    await _settle()

    await scheduler.trigger()
    await _settle()

    assert fetcher.calls == 2
    assert sleep.delays == [60.0]
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_start_twice_keeps_single_timer() -> None:
    fetcher, sleep = CountingFetcher(), ManualSleep()
    scheduler = _scheduler(fetcher, ConfigHolder(PollConfig()), sleep)

    scheduler.start()
    scheduler.start()
    await _settle()

    assert fetcher.calls == 2
    assert sleep.delays == [60.0]
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_failing_cycle_keeps_timer_running() -> None:
    fetcher, sleep = CountingFetcher(error=RuntimeError("boom")), ManualSleep()
    scheduler = _scheduler(fetcher, ConfigHolder(PollConfig()), sleep)

    scheduler.start()
    await _settle()
    sleep.elapse()
    await _settle()

    assert fetcher.calls == 2
    assert scheduler.state is SchedulerState.ARMED
    await scheduler.aclose()


@pytest.mark.asyncio
async def test_aclose_returns_to_idle() -> None:
    fetcher, sleep = CountingFetcher(), ManualSleep()
    scheduler = _scheduler(fetcher, ConfigHolder(PollConfig()), sleep)
    scheduler.start()
    await _settle()

    await scheduler.aclose()
    sleep.elapse()
    await _settle()

    assert scheduler.state is SchedulerState.IDLE
    assert scheduler.armed_interval_minutes is None
    assert fetcher.calls == 1
    assert fetcher.closed is True
