"""Normalize raw error payloads into ``{extensions: {code, message}}``."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from functools import reduce
from typing import Any

from fetchero.models import NormalizedError

ErrorFormatter = Callable[[dict[str, Any]], dict[str, Any]]


def is_not_found(errors: Sequence[Mapping[str, Any]] | None) -> bool:
    """True if the first error carries a ``404`` code."""
    if not errors:
        return False
    extensions = errors[0].get("extensions") or {}
    return str(extensions.get("code")) == "404"


def _attach_code(error: dict[str, Any]) -> dict[str, Any]:
    extensions = error.get("extensions") or {}
    code = extensions.get("code") or error.get("code") or ""
    message = extensions.get("message") or error.get("message") or ""
    return {"message": message, "extensions": {**extensions, "code": code}}


def _attach_message(error: dict[str, Any]) -> dict[str, Any]:
    return {"extensions": {**error["extensions"], "message": error.get("message")}}


def _resolve_message(error: dict[str, Any]) -> dict[str, Any]:
    extensions = error["extensions"]
    code = extensions.get("code")
    message = extensions.get("message")
    if message is None:
        message = ""

    processed = message
    if str(code) == "422" and isinstance(message, Mapping):
        processed = ", ".join(str(v) for v in message.values())

    default_messages: dict[str, Any] = {
        "401": message,
        "404": message,
        "500": message,
        "422": processed,
        "BAD_USER_INPUT": "Input is not valid",
        "INTERNAL_SERVER_ERROR": "Internal Server Error",
    }

    # Any other extension keys are dropped here.
    return {
        "extensions": {
            "code": code,
            "message": (default_messages.get(str(code)) or "Unknown error") if code else "",
        }
    }


FORMATTERS: tuple[ErrorFormatter, ...] = (_attach_code, _attach_message, _resolve_message)


def compose(error: Mapping[str, Any]) -> NormalizedError:
    """Run ``error`` through the three formatting stages."""
    result = reduce(lambda acc, fmt: fmt(acc), FORMATTERS, dict(error))
    return result  # type: ignore[return-value]


def make_error_response(code: int | str, message: Any) -> NormalizedError:
    """Error entry for failures synthesized by the client itself.

    Bypasses :func:`compose`.
    """
    return {
        "message": "Internal Server Error",
        "extensions": {
            "message": message,
            "error": True,
            "code": str(code),
        },
    }
