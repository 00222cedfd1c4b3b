"""REST path resolver.

Attribute access and calls accumulate path segments; awaiting a verb sends
the request::

    users = client.rest.api.v1.users(123).posts
    result = await users.get(query={"page": 1})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import partialmethod
from typing import TYPE_CHECKING, Any

from fetchero.context import RequestContext, merge_headers
from fetchero.models import RequestDescriptor, ResponseEnvelope
from fetchero.url_builder import build_url, to_param
from fetchero.validators import validate_headers, validate_url

if TYPE_CHECKING:
    from fetchero.http_client import HttpClient

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete")


class RestPath:
    """Immutable REST path node.

    Every attribute that is not one of ``base``, ``headers`` or a lowercase
    HTTP verb becomes a new path segment; ``node.GET`` is a segment named
    ``"GET"`` while ``node.get`` is the verb.
    """

    __slots__ = ("_base_url", "_client", "_ctx", "_default_headers", "_segments")

    def __init__(
        self,
        client: HttpClient,
        base_url: str,
        default_headers: Mapping[str, str],
        segments: tuple[str, ...] = (),
        ctx: RequestContext | None = None,
    ) -> None:
        self._client = client
        self._base_url = base_url
        self._default_headers = default_headers
        self._segments = segments
        self._ctx = ctx or RequestContext()

    def _derive(self, segments: tuple[str, ...], ctx: RequestContext) -> RestPath:
        return RestPath(self._client, self._base_url, self._default_headers, segments, ctx)

    # -- chaining ---------------------------------------------------------

    def __getattr__(self, name: str) -> RestPath:
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> RestPath:
        # Item access always appends, so reserved words and names that are
        # not identifiers can still be used as segments.
        return self._derive((*self._segments, str(name)), self._ctx)

    def __call__(self, *args: Any) -> RestPath:
        extra = tuple(to_param(a) for a in args if a is not None)
        return self._derive((*self._segments, *extra), self._ctx)

    def base(self, new_base: str) -> RestPath:
        validate_url(new_base)
        return self._derive(self._segments, self._ctx.with_base(new_base))

    def headers(self, new_headers: Mapping[str, str]) -> RestPath:
        validate_headers(new_headers)
        return self._derive(self._segments, self._ctx.with_headers(new_headers))

    def __repr__(self) -> str:
        return f"RestPath({'/'.join(self._segments)!r})"

    # -- verbs ------------------------------------------------------------

    async def _send(
        self,
        method: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseEnvelope:
        url = build_url(self._ctx.base or self._base_url, self._segments, query)
        descriptor = RequestDescriptor(
            url=url,
            method=method,
            data=body,
            headers=merge_headers(self._default_headers, self._ctx.headers, headers),
        )
        logger.debug("resolved %s %s", method, url)
        return await self._client.make_request(descriptor)  # type: ignore[no-any-return]

    get = partialmethod(_send, "GET")
    post = partialmethod(_send, "POST")
    put = partialmethod(_send, "PUT")
    patch = partialmethod(_send, "PATCH")
    delete = partialmethod(_send, "DELETE")
