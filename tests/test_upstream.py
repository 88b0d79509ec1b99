import asyncio
import time

import httpx
import pytest

from core.exceptions import UpstreamConnectionError, UpstreamStatusError, UpstreamTimeoutError
from core.request_types import PreparedRequest
from services.upstream import UpstreamClient


def _client(handler, timeout=30.0):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    return http, UpstreamClient(http, timeout=timeout)


def _prepared(url="http://iptv.test/", method="GET", body=None):
    return PreparedRequest(method, url, {"User-Agent": "StreamVault/3.2", "Accept": "*/*"}, body)


@pytest.mark.asyncio
async def test_fetch_buffers_body():
    http, upstream = _client(
        lambda request: httpx.Response(200, text="#EXTM3U", headers={"content-type": "audio/mpegurl"})
    )
    async with http:
        result = await upstream.fetch(_prepared())

    assert result.content_type == "audio/mpegurl"
    assert result.text == "#EXTM3U"


@pytest.mark.asyncio
async def test_missing_content_type_is_empty():
    http, upstream = _client(lambda request: httpx.Response(200, content=b"{}"))
    async with http:
        result = await upstream.fetch(_prepared())

    assert result.content_type == ""


@pytest.mark.asyncio
async def test_non_2xx_raises_status_error():
    http, upstream = _client(lambda request: httpx.Response(503, text="busy"))
    async with http:
        with pytest.raises(UpstreamStatusError) as exc_info:
            await upstream.fetch(_prepared())

    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Upstream returned 503 Service Unavailable"


@pytest.mark.asyncio
async def test_timeout_cancels_fetch():
    cancelled = []

    async def handler(request):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return httpx.Response(200)

    http, upstream = _client(handler, timeout=0.1)
    async with http:
        started = time.monotonic()
        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await upstream.fetch(_prepared())
        elapsed = time.monotonic() - started

    assert exc_info.value.status_code == 504
    assert cancelled == [True]
    assert 0.1 <= elapsed < 1


@pytest.mark.asyncio
async def test_transport_error_raises_connection_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    http, upstream = _client(handler)
    async with http:
        with pytest.raises(UpstreamConnectionError) as exc_info:
            await upstream.fetch(_prepared())

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Proxy error: connection refused"


@pytest.mark.asyncio
async def test_post_sends_body():
    seen = []

    def handler(request):
        seen.append((request.method, request.content))
        return httpx.Response(200, text="ok")

    http, upstream = _client(handler)
    async with http:
        await upstream.fetch(_prepared(method="POST", body=b"a=1"))

    assert seen == [("POST", b"a=1")]
