"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any

import pytest
import respx

from fetchero import Fetchero
from fetchero.http_client import HttpClient
from fetchero.models import Interceptors, RequestDescriptor, TransportResponse

BASE_URL = "https://api.example.com"


class RecordingTransport:
    """Transport stub that records descriptors and replays canned results."""

    def __init__(self, data: Any = None, status: int = 200, error: Exception | None = None) -> None:
        self.data = data
        self.status = status
        self.error = error
        self.requests: list[RequestDescriptor] = []
        self.closed = False

    @property
    def last(self) -> RequestDescriptor:
        return self.requests[-1]

    async def send(self, request: RequestDescriptor) -> TransportResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return TransportResponse(data=self.data, status=self.status, headers={"content-type": "application/json"})

    async def aclose(self) -> None:
        self.closed = True


class QueryRecorder:
    """``build_query`` stand-in that records its inputs."""

    def __init__(self, query: Any = "query { user { id } }", variables: Any = None) -> None:
        self.query = query
        self.variables = variables if variables is not None else {}
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, parts: list[str], args: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((parts, args))
        return {"query": self.query, "variables": self.variables}


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport(data={"data": {"ok": True}})


@pytest.fixture()
def engine(transport: RecordingTransport) -> HttpClient:
    return HttpClient(transport, Interceptors())  # type: ignore[arg-type]


@pytest.fixture()
def recorder() -> QueryRecorder:
    return QueryRecorder()


@pytest.fixture()
def stub_client(transport: RecordingTransport, recorder: QueryRecorder) -> Fetchero:
    """Fetchero wired to the recording transport and query recorder."""
    return Fetchero(
        BASE_URL,
        headers={"Content-Type": "application/json"},
        transport=transport,  # type: ignore[arg-type]
        query_builder=recorder,
    )


@pytest.fixture()
def mock_api():
    """Activate respx mock for the API base URL."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as rsps:
        yield rsps


@pytest.fixture()
async def client(mock_api: respx.MockRouter):  # noqa: ARG001
    """Fetchero wired to the mocked httpx transport."""
    c = Fetchero(BASE_URL, headers={"Content-Type": "application/json"})
    yield c
    await c.aclose()
