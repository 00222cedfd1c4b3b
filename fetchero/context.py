"""Per-chain configuration threaded through every resolver step."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header layers key by key; later layers win."""
    result: dict[str, str] = {}
    for layer in layers:
        if layer:
            result.update(layer)
    return result


@dataclass(frozen=True)
class RequestContext:
    """Base URL and header overrides collected along a chain.

    Never mutated: :meth:`with_base` and :meth:`with_headers` return new
    contexts, so sibling chains built from one parent stay independent.
    """

    base: str | None = None
    headers: Mapping[str, str] | None = None

    def with_base(self, base: str) -> RequestContext:
        return replace(self, base=base)

    def with_headers(self, headers: Mapping[str, str]) -> RequestContext:
        return replace(self, headers=MappingProxyType(merge_headers(self.headers, headers)))
