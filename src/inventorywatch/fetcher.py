"""One poll cycle: query, fetch, parse, filter, publish, notify."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from inventorywatch._api.fulfillment import parse_stores
from inventorywatch._api.query import build_inventory_url
from inventorywatch._constants import HOST
from inventorywatch._transport import Transport
from inventorywatch.catalog import CatalogTables
from inventorywatch.config import PollConfig
from inventorywatch.exceptions import InventoryWatchError
from inventorywatch.ingestion.filter import filter_available_parts
from inventorywatch.ingestion.notification import compose_notification
from inventorywatch.models.catalog import SKUCatalog
from inventorywatch.models.result import PollResult
from inventorywatch.notifier import LoggingNotifier, Notifier
from inventorywatch.state.store import InventoryStateStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AvailabilityFetcher:
    """Runs poll cycles against the inventory endpoint.

    Overlapping calls to :meth:`run_cycle` are coalesced: while a cycle is
    in flight, further calls wait for it and return its result instead of
    issuing a second request.
    """

    def __init__(
        self,
        config_provider: Callable[[], PollConfig],
        catalogs: CatalogTables,
        transport: Transport,
        state: InventoryStateStore,
        *,
        notifier: Notifier | None = None,
        host: str = HOST,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config_provider = config_provider
        self._catalogs = catalogs
        self._transport = transport
        self._state = state
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._host = host
        self._clock = clock
        self._inflight: asyncio.Task[PollResult | None] | None = None

    @property
    def is_running(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def run_cycle(self) -> PollResult | None:
        """Run (or join) a poll cycle.

        Returns the published result, or ``None`` when the cycle failed
        and an error state was published instead.
        """
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.create_task(self._cycle())
        else:
            _logger.debug("Poll cycle already in flight; joining it")
        return await asyncio.shield(self._inflight)

    async def aclose(self) -> None:
        task = self._inflight
        self._inflight = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _sync_preferred_store(self, config: PollConfig) -> None:
        info = self._catalogs.store_info(config.store_number)
        self._state.publish_preferred_store(info.store_name if info is not None else None)

    async def _cycle(self) -> PollResult | None:
        config = self._config_provider()
        self._state.begin_cycle()
        self._sync_preferred_store(config)

        try:
            catalog = self._catalogs.sku_catalog(config.country_code, config.product_line)
            url = build_inventory_url(config, catalog, host=self._host)
            _logger.debug("query url: %s", url)

            body = await self._transport.get(url)
            stores = parse_stores(body)
            result = PollResult(
                timestamp=self._clock(),
                entries=filter_available_parts(stores, config.preferred_filter),
            )
            self._state.publish_result(result)
        except InventoryWatchError as exc:
            _logger.warning("Poll cycle failed (%s): %s", exc.kind, exc)
            self._state.publish_error(exc)
            return None
        finally:
            self._state.finish_cycle()

        _logger.debug("Found %d stores with matching inventory", len(result.entries))
        await self._notify(config, catalog, result)
        return result

    async def _notify(self, config: PollConfig, catalog: SKUCatalog, result: PollResult) -> None:
        notification = compose_notification(
            result.entries,
            catalog,
            preferred=config.preferred_skus,
            custom_sku=config.custom_sku,
            custom_sku_nickname=config.custom_sku_nickname,
        )
        if config.notify_only_preferred and not notification.is_preferred_hit:
            _logger.debug("No preferred model found; notification suppressed")
            return

        try:
            await self._notifier.notify(notification)
        except Exception:
            _logger.warning("Notifier %r failed", self._notifier, exc_info=True)
