"""Recurring poll scheduling.

The scheduler is either ``IDLE`` (no timer) or ``ARMED`` (a timer task
firing every *T* minutes).  Every fired cycle, whether from the timer or a
manual :meth:`PollScheduler.trigger`, first re-reads the configured interval
and re-arms the timer if it changed.  Re-arming never fires a cycle by
itself and never cancels a request that is already in flight.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from enum import StrEnum
from typing import Any

from inventorywatch.config import PollConfig
from inventorywatch.fetcher import AvailabilityFetcher
from inventorywatch.models.result import PollResult
from inventorywatch.version import VersionChecker

_logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class SchedulerState(StrEnum):
    IDLE = "idle"
    ARMED = "armed"


class PollScheduler:
    """Drives :class:`AvailabilityFetcher` on the configured interval."""

    def __init__(
        self,
        fetcher: AvailabilityFetcher,
        config_provider: Callable[[], PollConfig],
        *,
        version_checker: VersionChecker | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._fetcher = fetcher
        self._config_provider = config_provider
        self._version_checker = version_checker
        self._sleep = sleep
        self._timer: asyncio.Task[None] | None = None
        self._armed_interval: int | None = None
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.ARMED if self._timer is not None else SchedulerState.IDLE

    @property
    def armed_interval_minutes(self) -> int | None:
        return self._armed_interval

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task[PollResult | None]:
        """Fire a cycle now and arm the timer.  Must run inside the event loop."""
        if self._timer is None:
            self._arm(self._config_provider().update_interval_minutes)
        return self.trigger()

    async def aclose(self) -> None:
        """Cancel the timer and any background work, returning to ``IDLE``."""
        timer = self._timer
        self._disarm()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if timer is not None:
            tasks.append(timer)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        await self._fetcher.aclose()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def trigger(self) -> asyncio.Task[PollResult | None]:
        """Fire a poll cycle (and a version check) in the background."""
        return self._spawn(self._fire())

    def refresh_interval(self) -> bool:
        """Re-arm the timer if the configured interval changed.

        Returns ``True`` when the timer was re-armed.  Has no effect while
        ``IDLE``.
        """
        if self._timer is None:
            return False
        interval = self._config_provider().update_interval_minutes
        if interval == self._armed_interval:
            return False
        _logger.info("Update interval changed from %s to %s minutes", self._armed_interval, interval)
        self._disarm()
        self._arm(interval)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _arm(self, interval_minutes: int) -> None:
        self._armed_interval = interval_minutes
        self._timer = asyncio.create_task(self._run_timer(interval_minutes * 60.0))
        _logger.debug("Poll timer armed: every %d minute(s)", interval_minutes)

    def _disarm(self) -> None:
        timer = self._timer
        self._timer = None
        self._armed_interval = None
        if timer is not None and not timer.done():
            timer.cancel()

    async def _run_timer(self, interval_seconds: float) -> None:
        while True:
            await self._sleep(interval_seconds)
            self.trigger()

    async def _fire(self) -> PollResult | None:
        self.refresh_interval()
        if self._version_checker is not None:
            self._spawn(self._version_checker.check())
        return await self._fetcher.run_cycle()

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Background poll task failed", exc_info=exc)
