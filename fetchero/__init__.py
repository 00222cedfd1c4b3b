"""fetchero: fluent REST and GraphQL requests over httpx."""

__version__ = "0.1.0"

from fetchero.client import Fetchero, Surfaces, create_fetchero, gql, rest
from fetchero.error_handler import compose, is_not_found, make_error_response
from fetchero.errors import (
    BuildError,
    FetcheroError,
    QueryBuildFailed,
    ValidationError,
)
from fetchero.models import (
    GraphQLResponse,
    Interceptors,
    RequestDescriptor,
    ResponseEnvelope,
    TransportResponse,
)
from fetchero.query import build_query
from fetchero.url_builder import build_url

__all__ = [
    "BuildError",
    "Fetchero",
    "FetcheroError",
    "GraphQLResponse",
    "Interceptors",
    "QueryBuildFailed",
    "RequestDescriptor",
    "ResponseEnvelope",
    "Surfaces",
    "TransportResponse",
    "ValidationError",
    "build_query",
    "build_url",
    "compose",
    "create_fetchero",
    "gql",
    "is_not_found",
    "make_error_response",
    "rest",
]
