"""Default GraphQL query synthesis.

``build_query`` fills the argument slot between two template parts. An
argument given as ``{"type": ..., "value": ...}`` becomes a typed variable
declared on the operation; any other value is inlined as a GraphQL literal::

    >>> build_query(["query { user (", ") { id } }"], {"id": {"type": "ID!", "value": 7}})
    {'query': 'query ($id: ID!) { user (id: $id) { id } }', 'variables': {'id': 7}}
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any, TypedDict

_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class BuiltQuery(TypedDict):
    query: str
    variables: dict[str, Any]


def is_variable(value: Any) -> bool:
    return isinstance(value, Mapping) and set(value) == {"type", "value"}


def to_literal(value: Any) -> str:
    """Render a Python value as a GraphQL input literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, Mapping):
        fields = ", ".join(f"{_check_name(k)}: {to_literal(v)}" for k, v in value.items())
        return "{" + fields + "}"
    if isinstance(value, Sequence):
        return "[" + ", ".join(to_literal(v) for v in value) + "]"
    raise TypeError(f"unsupported argument type: {type(value).__name__}")


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise ValueError(f"invalid GraphQL name: {name!r}")
    return name


def build_query(template_parts: Sequence[str], args: Mapping[str, Any]) -> BuiltQuery:
    """Join ``template_parts`` around the rendered ``args``.

    The first part must start with the operation keyword; variable
    definitions are inserted right after it.
    """
    head, tail = template_parts
    rendered: list[str] = []
    definitions: list[str] = []
    variables: dict[str, Any] = {}

    for name, value in args.items():
        _check_name(name)
        if is_variable(value):
            definitions.append(f"${name}: {value['type']}")
            variables[name] = value["value"]
            rendered.append(f"{name}: ${name}")
        else:
            rendered.append(f"{name}: {to_literal(value)}")

    if definitions:
        operation, _, rest = head.partition(" ")
        head = f"{operation} ({', '.join(definitions)}) {rest}"

    return {"query": head + ", ".join(rendered) + tail, "variables": variables}
