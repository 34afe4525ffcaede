"""High-level async entry point for watching store inventory."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from inventorywatch._constants import HOST, RELEASE_TAGS_URL
from inventorywatch._transport import HttpTransport, Transport
from inventorywatch.catalog import CatalogTables
from inventorywatch.config import PollConfig
from inventorywatch.exceptions import InventoryWatchError
from inventorywatch.fetcher import AvailabilityFetcher
from inventorywatch.models.result import InventorySnapshot, PollResult
from inventorywatch.notifier import Notifier
from inventorywatch.scheduler import PollScheduler, Sleep
from inventorywatch.state.store import InventoryStateStore, Subscriber
from inventorywatch.version import VersionChecker

_logger = logging.getLogger(__name__)


class InventoryWatch:
    """Async inventory watcher.

    Usage::

        async with InventoryWatch(config, catalogs, notifier=notifier) as watch:
            watch.subscribe(render)
            watch.start()
            await asyncio.Event().wait()

    *config* is either a fixed :class:`PollConfig` (replace it with
    :meth:`update_config`) or a callable returning the current snapshot,
    which is read again at the start of every cycle.
    """

    def __init__(
        self,
        config: PollConfig | Callable[[], PollConfig],
        catalogs: CatalogTables,
        *,
        notifier: Notifier | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        host: str = HOST,
        tags_url: str | None = RELEASE_TAGS_URL,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if callable(config):
            self._config_provider: Callable[[], PollConfig] = config
            self._config: PollConfig | None = None
        else:
            self._config = config
            self._config_provider = self._current_config
        self._catalogs = catalogs
        self._notifier = notifier
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._timeout = timeout
        self._host = host
        self._tags_url = tags_url
        self._sleep = sleep
        self._state = InventoryStateStore()
        self._scheduler: PollScheduler | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> InventoryWatch:
        if self._transport is None:
            if self._http_session is None:
                if self._timeout is not None:
                    self._http_session = aiohttp.ClientSession(timeout=self._timeout)
                else:
                    self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session)

        fetcher = AvailabilityFetcher(
            self._config_provider,
            self._catalogs,
            self._transport,
            self._state,
            notifier=self._notifier,
            host=self._host,
        )
        checker = None
        if self._tags_url:
            checker = VersionChecker(
                self._transport,
                self._state,
                self._config_provider().app_version,
                tags_url=self._tags_url,
            )
        self._scheduler = PollScheduler(
            fetcher,
            self._config_provider,
            version_checker=checker,
            sleep=self._sleep,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._scheduler is not None:
            await self._scheduler.aclose()
            self._scheduler = None
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> InventoryStateStore:
        return self._state

    @property
    def snapshot(self) -> InventorySnapshot:
        return self._state.snapshot

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        return self._state.subscribe(callback)

    @property
    def config(self) -> PollConfig:
        return self._config_provider()

    def update_config(self, config: PollConfig) -> None:
        """Replace the fixed configuration and re-arm the timer if needed."""
        if self._config is None:
            raise InventoryWatchError("Configuration is supplied by a provider callable")
        self._config = config
        if self._scheduler is not None:
            self._scheduler.refresh_interval()

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    @property
    def scheduler(self) -> PollScheduler:
        return self._require_scheduler()

    def start(self) -> None:
        """Poll now and then every configured interval."""
        self._require_scheduler().start()

    async def run_query(self) -> PollResult | None:
        """Run one poll cycle now (joining a cycle already in flight)."""
        return await self._require_scheduler().trigger()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _current_config(self) -> PollConfig:
        assert self._config is not None  # noqa: S101
        return self._config

    def _require_scheduler(self) -> PollScheduler:
        if self._scheduler is None:
            raise InventoryWatchError("Watcher not initialized. Use 'async with InventoryWatch(...) as watch:'")
        return self._scheduler
