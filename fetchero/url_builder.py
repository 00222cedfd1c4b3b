"""Join a base URL, path segments and query parameters into one URL."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit

from fetchero.errors import EmptyBase, InvalidUrlConstruction


def to_param(value: Any) -> str:
    """Coerce a segment or query value to its wire string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(base: str, segments: Sequence[str], query: Mapping[str, Any] | None = None) -> str:
    """Resolve ``segments`` against ``base`` and append ``query``.

    Resolution follows RFC 3986, so ``https://api.example.com/`` and
    ``https://api.example.com`` behave the same. Query entries whose value is
    ``None`` are skipped; ``0``, ``False`` and ``""`` are kept.
    """
    if not base or not isinstance(base, str):
        raise EmptyBase

    try:
        parts = urlsplit(base)
        parts.port  # noqa: B018 - raises ValueError on a bad port
    except ValueError as e:
        raise InvalidUrlConstruction(str(e)) from e
    if not parts.scheme or not parts.netloc:
        raise InvalidUrlConstruction(f"{base!r} is not an absolute URL")

    root = urlunsplit(parts._replace(path=parts.path or "/"))
    url = urljoin(root, "/".join(segments))

    if query:
        params = [(key, to_param(value)) for key, value in query.items() if value is not None]
        if params:
            sep = "&" if urlsplit(url).query else "?"
            url = f"{url}{sep}{urlencode(params)}"

    return url
