from __future__ import annotations

from typing import Any

import aiohttp
import pytest
from yarl import URL

from inventorywatch._transport import HttpTransport
from inventorywatch.exceptions import InventoryTransportError


class _FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    async def read(self) -> bytes:
        return self._body


class _FakeRequest:
    def __init__(self, response: _FakeResponse | None, error: Exception | None) -> None:
        self._response = response
        self._error = error

    async def __aenter__(self) -> _FakeResponse:
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.requests: list[tuple[URL, dict[str, str]]] = []

    def get(self, url: URL, *, headers: dict[str, str]) -> _FakeRequest:
        self.requests.append((url, headers))
        return _FakeRequest(self._response, self._error)


URL_STR = "https://www.apple.com/shop/fulfillment-messages?parts.0=MKGR3LL/A&searchNearby=true&store=R032"


@pytest.mark.asyncio
async def test_returns_body_on_200() -> None:
    session = _FakeSession(_FakeResponse(200, b'{"body": {}}'))
    transport = HttpTransport(session)  # type: ignore[arg-type]

    body = await transport.get(URL(URL_STR, encoded=True))

    assert body == b'{"body": {}}'
    url, headers = session.requests[0]
    assert str(url) == URL_STR
    assert headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_non_200_raises_transport_error() -> None:
    transport = HttpTransport(_FakeSession(_FakeResponse(503, b"busy")))  # type: ignore[arg-type]

    with pytest.raises(InventoryTransportError) as exc_info:
        await transport.get(URL_STR)

    assert exc_info.value.status_code == 503
    assert "busy" in str(exc_info.value)


@pytest.mark.asyncio
async def test_client_error_is_wrapped() -> None:
    error = aiohttp.ClientConnectionError("connection refused")
    transport = HttpTransport(_FakeSession(error=error))  # type: ignore[arg-type]

    with pytest.raises(InventoryTransportError) as exc_info:
        await transport.get(URL_STR)

    assert exc_info.value.__cause__ is error
    assert exc_info.value.url == URL_STR


@pytest.mark.asyncio
async def test_timeout_is_wrapped() -> None:
    transport = HttpTransport(_FakeSession(error=TimeoutError()))  # type: ignore[arg-type]

    with pytest.raises(InventoryTransportError, match="TimeoutError"):
        await transport.get(URL_STR)


@pytest.mark.asyncio
async def test_extra_headers_are_sent() -> None:
    session = _FakeSession(_FakeResponse(200, b"[]"))
    transport = HttpTransport(session, headers={"user-agent": "custom"})  # type: ignore[arg-type]

    await transport.get(URL_STR)

    assert session.requests[0][1]["user-agent"] == "custom"
