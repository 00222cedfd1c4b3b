"""GraphQL operation resolver.

Three layers: the root picks the operation kind, the operation proxy picks
the field, and the query builder collects arguments until ``select`` or
``execute`` sends the request::

    result = await client.gql.query.user({"id": 1}).select("id name")
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Generator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from fetchero.context import RequestContext, merge_headers
from fetchero.errors import FieldNameRequired, InvalidGeneratedQuery, InvalidOperation, InvalidProperty, QueryBuildFailed
from fetchero.models import GraphQLResponse, OperationType, RequestDescriptor
from fetchero.validators import validate_fields, validate_graphql_args, validate_headers, validate_url

if TYPE_CHECKING:
    from fetchero.http_client import HttpClient
    from fetchero.query import BuiltQuery

logger = logging.getLogger(__name__)

GRAPHQL_OPERATIONS: tuple[OperationType, ...] = ("query", "mutation", "subscription")

QueryBuilderFn = Callable[[list[str], Mapping[str, Any]], "BuiltQuery"]


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def template_parts(operation: str, field: str, has_args: bool, selection: str = "") -> list[str]:
    """Two-part template wrapped around the argument list."""
    select = f"{{ {selection.strip()} }}"
    if has_args:
        return [f"{operation} {{ {field} (", f") {select} }}"]
    return [f"{operation} {{ {field} ", f" {select} }}"]


class _Resolver:
    """Shared wiring handed down from the client to every GraphQL node."""

    __slots__ = ("base_url", "build_query", "client", "default_headers")

    def __init__(
        self,
        client: HttpClient,
        base_url: str,
        default_headers: Mapping[str, str],
        build_query: QueryBuilderFn,
    ) -> None:
        self.client = client
        self.base_url = base_url
        self.default_headers = default_headers
        self.build_query = build_query


class QueryBuilder:
    """Immutable operation state: kind, field, arguments and context.

    Exposes only ``select``, ``execute``, ``base`` and ``headers``; calling
    the builder returns a sibling with new arguments, and awaiting it runs
    ``execute()``.
    """

    __slots__ = ("_args", "_ctx", "_field", "_operation", "_resolver")

    def __init__(
        self,
        resolver: _Resolver,
        operation: OperationType,
        field: str,
        args: Mapping[str, Any] | None = None,
        ctx: RequestContext | None = None,
    ) -> None:
        self._resolver = resolver
        self._operation = operation
        self._field = field
        self._args = MappingProxyType(dict(args or {}))
        self._ctx = ctx or RequestContext()

    def _derive(self, args: Mapping[str, Any], ctx: RequestContext) -> QueryBuilder:
        return QueryBuilder(self._resolver, self._operation, self._field, args, ctx)

    def __call__(self, args: Mapping[str, Any] | None = None) -> QueryBuilder:
        validate_graphql_args(args)
        return self._derive(args or {}, self._ctx)

    def __getattr__(self, name: str) -> Any:
        if _is_dunder(name):
            raise AttributeError(name)
        raise InvalidProperty(name)

    def __repr__(self) -> str:
        return f"QueryBuilder({self._operation} {self._field} args={dict(self._args)!r})"

    def base(self, new_base: str) -> QueryBuilder:
        validate_url(new_base)
        return self._derive(self._args, self._ctx.with_base(new_base))

    def headers(self, new_headers: Mapping[str, str]) -> QueryBuilder:
        validate_headers(new_headers)
        return self._derive(self._args, self._ctx.with_headers(new_headers))

    def select(self, fields: str) -> Awaitable[GraphQLResponse]:
        """Build the query now and return an awaitable that sends it."""
        validate_fields(fields)
        return self._execute(self._build(fields))

    def execute(self) -> Awaitable[GraphQLResponse]:
        """Same as :meth:`select` with an empty selection."""
        return self._execute(self._build())

    def __await__(self) -> Generator[Any, None, GraphQLResponse]:
        # ``await builder`` is shorthand for ``await builder.execute()``.
        return self._execute(self._build()).__await__()

    def _build(self, selection: str = "") -> BuiltQuery:
        parts = template_parts(self._operation, self._field, bool(self._args), selection)
        try:
            result = self._resolver.build_query(parts, dict(self._args))
        except Exception as e:
            raise QueryBuildFailed(self._operation, self._field, str(e) or type(e).__name__) from e

        query = result.get("query") if isinstance(result, Mapping) else None
        if not query or not isinstance(query, str):
            raise InvalidGeneratedQuery(self._operation, self._field)
        return result

    async def _execute(self, built: BuiltQuery) -> GraphQLResponse:
        r = self._resolver
        descriptor = RequestDescriptor(
            url=self._ctx.base or r.base_url,
            method="POST",
            data={"query": built["query"], "variables": built.get("variables") or {}},
            headers=merge_headers({"Content-Type": "application/json"}, r.default_headers, self._ctx.headers),
        )
        logger.debug("%s %s → %s", self._operation, self._field, descriptor.url)
        return await r.client.make_request(descriptor)  # type: ignore[no-any-return]


class OperationProxy:
    """Operation kind chosen; the next attribute names the field."""

    __slots__ = ("_ctx", "_operation", "_resolver")

    def __init__(self, resolver: _Resolver, operation: OperationType, ctx: RequestContext | None = None) -> None:
        self._resolver = resolver
        self._operation = operation
        self._ctx = ctx or RequestContext()

    def __getattr__(self, name: str) -> QueryBuilder:
        if _is_dunder(name):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, field: str | int) -> QueryBuilder:
        if field == "" or field is None:
            raise FieldNameRequired
        return QueryBuilder(self._resolver, self._operation, str(field), {}, self._ctx)

    def __repr__(self) -> str:
        return f"OperationProxy({self._operation})"


class GraphQLRoot:
    """Entry point exposing ``query``, ``mutation`` and ``subscription``."""

    __slots__ = ("_ctx", "_resolver")

    def __init__(self, resolver: _Resolver, ctx: RequestContext | None = None) -> None:
        self._resolver = resolver
        self._ctx = ctx or RequestContext()

    def _operation(self, name: str) -> OperationProxy:
        kind = name.lower() if isinstance(name, str) else name
        if kind not in GRAPHQL_OPERATIONS:
            raise InvalidOperation(name)
        return OperationProxy(self._resolver, kind, self._ctx)

    @property
    def query(self) -> OperationProxy:
        return self._operation("query")

    @property
    def mutation(self) -> OperationProxy:
        return self._operation("mutation")

    @property
    def subscription(self) -> OperationProxy:
        return self._operation("subscription")

    def __getattr__(self, name: str) -> OperationProxy:
        if _is_dunder(name):
            raise AttributeError(name)
        return self._operation(name)

    def __repr__(self) -> str:
        return "GraphQLRoot()"
