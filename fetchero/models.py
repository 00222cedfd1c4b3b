"""Request, response and envelope types shared across fetchero."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict, Union

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
OperationType = Literal["query", "mutation", "subscription"]

# Default request timeout in seconds (30 000 ms).
DEFAULT_TIMEOUT = 30.0


class ErrorExtensions(TypedDict, total=False):
    code: str
    message: Any
    error: bool


class NormalizedError(TypedDict, total=False):
    message: str
    extensions: ErrorExtensions


class ResponseEnvelope(TypedDict, total=False):
    data: Any
    errors: list[NormalizedError]


class GraphQLResponse(ResponseEnvelope, total=False):
    extensions: dict[str, Any]


@dataclass
class RequestDescriptor:
    """One fully resolved outbound request."""

    url: str | None
    method: str
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None
    timeout: float | None = None


@dataclass
class TransportResponse:
    """Raw result of a transport call."""

    data: Any
    status: int
    headers: dict[str, str] = field(default_factory=dict)


RequestHook = Callable[[RequestDescriptor], Union[RequestDescriptor, Awaitable[RequestDescriptor]]]
ResponseHook = Callable[[TransportResponse], Any]


@dataclass(frozen=True)
class Interceptors:
    """Optional hooks around every request.

    ``request`` receives the descriptor and returns the one to send.
    ``response`` receives the raw :class:`TransportResponse`; whatever it
    returns replaces the envelope. Both may be plain functions or coroutines.
    """

    request: RequestHook | None = None
    response: ResponseHook | None = None
