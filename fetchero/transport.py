"""HTTP transport layer wrapping httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from fetchero.models import RequestDescriptor, TransportResponse

logger = logging.getLogger(__name__)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpTransport:
    """Sends a :class:`RequestDescriptor` and returns the decoded body.

    With a ``client`` every request goes through that pooled
    ``httpx.AsyncClient`` until :meth:`aclose`. Without one, each request
    opens and closes its own client, so there is nothing left to release.

    Raises ``httpx.HTTPStatusError`` for 4xx/5xx responses and
    ``httpx.RequestError`` subclasses for network failures and timeouts.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client
        logger.debug("transport ready (%s)", "pooled" if client else "per request")

    async def send(self, request: RequestDescriptor) -> TransportResponse:
        if self._client is not None:
            return await self._send(self._client, request)
        async with httpx.AsyncClient() as client:
            return await self._send(client, request)

    async def _send(self, client: httpx.AsyncClient, request: RequestDescriptor) -> TransportResponse:
        logger.debug("%s %s", request.method, request.url)
        kwargs: dict[str, Any] = {"headers": request.headers, "timeout": request.timeout}
        if isinstance(request.data, (str, bytes)):
            kwargs["content"] = request.data
        elif request.data is not None:
            kwargs["json"] = request.data

        try:
            r = await client.request(request.method, request.url, **kwargs)  # type: ignore[arg-type]
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("%s %s → %d: %s", request.method, request.url, e.response.status_code, e.response.text[:200])
            raise
        except httpx.RequestError as e:
            logger.error("%s %s connection failed: %s", request.method, request.url, e)
            raise
        return TransportResponse(data=_decode(r), status=r.status_code, headers=dict(r.headers))

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
        logger.debug("transport closed")
