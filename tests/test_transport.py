"""Tests for fetchero.transport."""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from fetchero.models import RequestDescriptor
from fetchero.transport import HttpTransport

BASE_URL = "https://api.example.com"


class TestHttpTransport:
    async def test_get_success(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            rsps.get("/test").respond(json={"ok": True}, headers={"X-Trace": "abc"})
            t = HttpTransport()
            r = await t.send(RequestDescriptor(url=f"{BASE_URL}/test", method="GET"))
            assert r.data == {"ok": True}
            assert r.status == 200
            assert r.headers["x-trace"] == "abc"
            await t.aclose()

    async def test_post_json_body(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            route = rsps.post("/gen").respond(json={"data": {}})
            t = HttpTransport()
            await t.send(RequestDescriptor(url=f"{BASE_URL}/gen", method="POST", data={"prompt": "x"}))
            request = route.calls.last.request
            assert json.loads(request.content) == {"prompt": "x"}
            assert request.headers["content-type"] == "application/json"
            await t.aclose()

    async def test_raw_string_body(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            route = rsps.put("/raw").respond(status_code=204)
            t = HttpTransport()
            r = await t.send(
                RequestDescriptor(url=f"{BASE_URL}/raw", method="PUT", data="plain", headers={"Content-Type": "text/plain"})
            )
            assert route.calls.last.request.content == b"plain"
            assert r.data is None
            await t.aclose()

    async def test_non_json_body_returned_as_text(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            rsps.get("/text").respond(text="hello")
            t = HttpTransport()
            r = await t.send(RequestDescriptor(url=f"{BASE_URL}/text", method="GET"))
            assert r.data == "hello"
            await t.aclose()

    async def test_http_error(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            rsps.get("/bad").respond(status_code=404, text="not found")
            t = HttpTransport()
            with pytest.raises(httpx.HTTPStatusError):
                await t.send(RequestDescriptor(url=f"{BASE_URL}/bad", method="GET"))
            await t.aclose()

    async def test_connection_error(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            rsps.get("/fail").mock(side_effect=httpx.ConnectError("refused"))
            t = HttpTransport()
            with pytest.raises(httpx.ConnectError):
                await t.send(RequestDescriptor(url=f"{BASE_URL}/fail", method="GET"))
            await t.aclose()

    async def test_uses_given_client(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            route = rsps.get("/x").respond(json={})
            async with httpx.AsyncClient(headers={"X-Client": "shared"}) as shared:
                t = HttpTransport(shared)
                await t.send(RequestDescriptor(url=f"{BASE_URL}/x", method="GET"))
            assert route.calls.last.request.headers["x-client"] == "shared"

    async def test_per_request_client_without_pool(self):
        with respx.mock(base_url=BASE_URL) as rsps:
            route = rsps.get("/x").respond(json={"n": 1})
            t = HttpTransport()
            first = await t.send(RequestDescriptor(url=f"{BASE_URL}/x", method="GET"))
            second = await t.send(RequestDescriptor(url=f"{BASE_URL}/x", method="GET"))
            assert first.data == second.data == {"n": 1}
            assert route.call_count == 2
            await t.aclose()

    async def test_aclose_closes_pooled_client(self):
        pool = httpx.AsyncClient()
        t = HttpTransport(pool)
        await t.aclose()
        assert pool.is_closed
