"""HTTP fetching utilities for upstream requests."""

import asyncio

import httpx

from core.exceptions import UpstreamConnectionError, UpstreamStatusError, UpstreamTimeoutError
from core.request_types import PreparedRequest, UpstreamResult


class UpstreamClient:
    """Fetch target URLs with a hard wall-clock limit."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = 30.0) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, prepared: PreparedRequest) -> UpstreamResult:
        """Fetch and buffer the upstream body.

        The connect, send and body read all run inside one timeout scope;
        when it expires the in-flight request is cancelled.

        Raises:
            UpstreamTimeoutError: The limit elapsed before the body was read.
            UpstreamStatusError: The upstream answered with a non-2xx status.
            UpstreamConnectionError: Any transport or decoding failure.
        """
        try:
            return await asyncio.wait_for(self._fetch(prepared), timeout=self._timeout)
        except (TimeoutError, httpx.TimeoutException):
            raise UpstreamTimeoutError(self._timeout) from None
        except (httpx.RequestError, httpx.InvalidURL, UnicodeDecodeError, LookupError) as e:
            raise UpstreamConnectionError(str(e)) from e

    async def _fetch(self, prepared: PreparedRequest) -> UpstreamResult:
        request = self._client.build_request(
            prepared.method,
            prepared.target_url,
            headers=prepared.headers,
            content=prepared.body,
        )
        response = await self._client.send(request, stream=True)
        try:
            if not response.is_success:
                raise UpstreamStatusError(response.status_code, response.reason_phrase)
            await response.aread()
        finally:
            await response.aclose()

        return UpstreamResult(
            content_type=response.headers.get("content-type", ""),
            text=response.text,
        )
