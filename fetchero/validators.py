"""Input guards for chain steps and the client constructor."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from fetchero.errors import (
    EmptySelection,
    InvalidArgs,
    InvalidBaseUrl,
    InvalidHeaders,
    InvalidInterceptors,
    InvalidUrl,
    MalformedBaseUrl,
)
from fetchero.models import Interceptors


def is_absolute_url(url: Any) -> bool:
    """True if ``url`` is a string with both a scheme and a host."""
    if not isinstance(url, str):
        return False
    try:
        parts = urlsplit(url)
        parts.port  # noqa: B018 - raises ValueError on a bad port
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def validate_url(url: Any) -> None:
    if not is_absolute_url(url):
        raise InvalidUrl(url)


def validate_headers(headers: Any) -> None:
    if not isinstance(headers, Mapping):
        raise InvalidHeaders


def validate_fields(fields: Any) -> None:
    if not isinstance(fields, str) or not fields.strip():
        raise EmptySelection


def validate_graphql_args(args: Any) -> None:
    """Accept ``None`` or a mapping of argument names."""
    if args is not None and not isinstance(args, Mapping):
        raise InvalidArgs


def validate_constructor_args(base_url: Any) -> None:
    if not base_url or not isinstance(base_url, str):
        raise InvalidBaseUrl
    if not is_absolute_url(base_url):
        raise MalformedBaseUrl


def coerce_interceptors(interceptors: Any) -> Interceptors:
    """Accept ``None``, an :class:`Interceptors` or a ``{request, response}`` mapping."""
    if interceptors is None:
        return Interceptors()
    if isinstance(interceptors, Mapping):
        unknown = set(interceptors) - {"request", "response"}
        if unknown:
            raise InvalidInterceptors(f"unknown hook(s): {', '.join(sorted(map(str, unknown)))}")
        interceptors = Interceptors(request=interceptors.get("request"), response=interceptors.get("response"))
    if not isinstance(interceptors, Interceptors):
        raise InvalidInterceptors(f"expected Interceptors or a mapping, got {type(interceptors).__name__}")
    for hook in (interceptors.request, interceptors.response):
        if hook is not None and not callable(hook):
            raise InvalidInterceptors(f"hook {hook!r} is not callable")
    return interceptors
