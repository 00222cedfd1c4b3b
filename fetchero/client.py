"""Client facade wiring a base URL and default headers into both surfaces."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import httpx

from fetchero.config import get_base_url, get_default_headers, get_timeout
from fetchero.graphql import GraphQLRoot, QueryBuilderFn, _Resolver
from fetchero.http_client import HttpClient
from fetchero.models import DEFAULT_TIMEOUT, Interceptors
from fetchero.query import build_query
from fetchero.rest_path import RestPath
from fetchero.transport import HttpTransport
from fetchero.validators import coerce_interceptors, validate_constructor_args

logger = logging.getLogger(__name__)


class Fetchero:
    """Composite client exposing ``rest`` and ``gql``.

    Usage::

        async with Fetchero("https://api.example.com", headers={"Authorization": "Bearer t"}) as f:
            users = await f.rest.users.get(query={"page": 1})
            user = await f.gql.query.user({"id": 1}).select("id name")

    Base URL and headers are frozen at construction; ``base()`` and
    ``headers()`` on a chain override them for that chain only.
    """

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str] | None = None,
        interceptors: Interceptors | Mapping[str, Any] | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        query_builder: QueryBuilderFn = build_query,
        transport: HttpTransport | None = None,
    ) -> None:
        validate_constructor_args(base_url)
        interceptors = coerce_interceptors(interceptors)
        self.base_url = base_url
        self.headers: Mapping[str, str] = MappingProxyType(dict(headers or {}))

        self._transport = transport or HttpTransport(httpx.AsyncClient())
        self._http = HttpClient(self._transport, interceptors, timeout)
        self._rest = RestPath(self._http, base_url, self.headers)
        self._gql = GraphQLRoot(_Resolver(self._http, base_url, self.headers, query_builder))
        logger.info("client ready: %s", base_url)

    @classmethod
    def from_config(cls, **kwargs: Any) -> Fetchero:
        """Build a client from the config file and ``FETCHERO_*`` env vars."""
        base_url = kwargs.pop("base_url", None) or get_base_url()
        headers = {**get_default_headers(), **(kwargs.pop("headers", None) or {})}
        kwargs.setdefault("timeout", get_timeout())
        return cls(base_url, headers, **kwargs)  # type: ignore[arg-type]

    @property
    def rest(self) -> RestPath:
        return self._rest

    @property
    def gql(self) -> GraphQLRoot:
        return self._gql

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> Fetchero:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()


@dataclass(frozen=True)
class Surfaces:
    """Both surfaces of one client plus the handle that closes it.

    Usage::

        async with create_fetchero("https://api.example.com") as api:
            await api.rest.users.get()
    """

    rest: RestPath
    gql: GraphQLRoot
    client: Fetchero = field(repr=False, compare=False)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> Surfaces:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()


def create_fetchero(base_url: str, headers: Mapping[str, str] | None = None, **kwargs: Any) -> Surfaces:
    """Both surfaces of a new client, frozen together."""
    instance = Fetchero(base_url, headers, **kwargs)
    return Surfaces(rest=instance.rest, gql=instance.gql, client=instance)


# A lone surface has no close handle, so unless the caller brings a transport
# it owns, each request opens and closes its own httpx client.


def rest(base_url: str, headers: Mapping[str, str] | None = None, **kwargs: Any) -> RestPath:
    kwargs["transport"] = kwargs.get("transport") or HttpTransport()
    return Fetchero(base_url, headers, **kwargs).rest


def gql(base_url: str, headers: Mapping[str, str] | None = None, **kwargs: Any) -> GraphQLRoot:
    kwargs["transport"] = kwargs.get("transport") or HttpTransport()
    return Fetchero(base_url, headers, **kwargs).gql
