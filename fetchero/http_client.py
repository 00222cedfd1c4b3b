"""Request execution: hooks, default timeout, transport call, envelope."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import httpx

from fetchero.error_handler import compose, make_error_response
from fetchero.models import DEFAULT_TIMEOUT, Interceptors, RequestDescriptor, ResponseEnvelope
from fetchero.validators import coerce_interceptors

if TYPE_CHECKING:
    from fetchero.transport import HttpTransport

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timeout"
NETWORK_MESSAGE = "Network connection failed"
FALLBACK_MESSAGE = "Network request failed"


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def failure_status(err: BaseException) -> int:
    if isinstance(err, httpx.HTTPStatusError):
        return err.response.status_code
    if isinstance(err, httpx.TimeoutException):
        return 408
    return 500


def failure_message(err: BaseException) -> str:
    """Pick the most specific human message for a failed request."""
    if isinstance(err, httpx.HTTPStatusError):
        try:
            payload = err.response.json()
        except ValueError:
            payload = None
        if isinstance(payload, Mapping):
            if payload.get("message"):
                return str(payload["message"])
            if payload.get("error"):
                return str(payload["error"])
    if isinstance(err, httpx.TimeoutException):
        return TIMEOUT_MESSAGE
    if isinstance(err, httpx.ConnectError):
        return NETWORK_MESSAGE
    return str(err) or FALLBACK_MESSAGE


class HttpClient:
    """Runs one resolved request and always returns an envelope.

    Transport errors, HTTP error statuses and hook failures are converted to
    ``{"data": None, "errors": [...]}`` instead of being raised.
    """

    def __init__(
        self,
        transport: HttpTransport,
        interceptors: Interceptors | Mapping[str, Any] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = transport
        self._interceptors = coerce_interceptors(interceptors)
        self._timeout = timeout

    async def make_request(self, request: RequestDescriptor) -> Any:
        try:
            if not request.url:
                raise ValueError("Request URL is required")

            final = request
            if self._interceptors.request:
                final = await _resolve(self._interceptors.request(request))

            if not final.timeout:
                final = replace(final, timeout=self._timeout)

            result = await self._transport.send(final)

            payload = result.data if isinstance(result.data, Mapping) else {}
            data = payload.get("data")
            errors = payload.get("errors")

            response: ResponseEnvelope = {"data": data}
            if isinstance(errors, list) and errors:
                response["errors"] = [compose(e) for e in errors]

            if self._interceptors.response:
                return await _resolve(self._interceptors.response(result))
            return response
        except Exception as e:  # noqa: BLE001 - every failure becomes an envelope
            return self._handle_request_error(request, e)

    def _handle_request_error(self, request: RequestDescriptor, err: Exception) -> ResponseEnvelope:
        status = failure_status(err)
        message = failure_message(err)
        logger.warning("%s %s failed (%d): %s", request.method, request.url, status, message)
        return {"data": None, "errors": [make_error_response(status, message)]}
