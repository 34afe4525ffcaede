"""HTTP transport for the inventory and release endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp
from yarl import URL

from inventorywatch._constants import USER_AGENT
from inventorywatch.exceptions import InventoryTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the fetcher and version checker.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get(self, url: URL | str) -> bytes:
        ...


class HttpTransport:
    """aiohttp-backed GET transport.

    Each call is a single request with no retry; the poll scheduler's next
    interval is the only retry.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._http = http_session
        self._headers = {"accept": "application/json", "user-agent": USER_AGENT}
        if headers:
            self._headers.update(headers)

    async def get(self, url: URL | str) -> bytes:
        """GET *url* and return the raw body.

        Raises
        ------
        InventoryTransportError
            On connection errors, timeouts and non-200 responses.
        """
        target = url if isinstance(url, URL) else URL(url, encoded=True)
        _logger.debug("GET %s", target)

        try:
            async with self._http.get(target, headers=self._headers) as resp:
                body = await resp.read()
                if resp.status != 200:
                    raise InventoryTransportError(
                        f"HTTP {resp.status} from {target.host}: {body[:200].decode('utf-8', 'replace')}",
                        status_code=resp.status,
                        url=str(target),
                    )
        except InventoryTransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise InventoryTransportError(
                f"Request to {target.host} failed: {str(exc) or type(exc).__name__}",
                url=str(target),
            ) from exc

        return body
