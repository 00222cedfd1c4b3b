"""Configuration file and environment settings for fetchero."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from fetchero.models import DEFAULT_TIMEOUT

# ============================================================================
# XDG Base Directory Configuration
# ============================================================================

# Config: ~/.config/fetchero/config.toml
CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "fetchero"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_BASE_URL = "FETCHERO_BASE_URL"
ENV_TIMEOUT = "FETCHERO_TIMEOUT"


# ============================================================================
# Config Functions
# ============================================================================


def load_config() -> dict[str, Any]:
    """Load configuration from TOML config file."""
    if CONFIG_FILE.exists():
        with CONFIG_FILE.open("rb") as f:
            return tomllib.load(f)
    return {}


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return str(value)


def _toml_key(key: str) -> str:
    if key.replace("_", "").replace("-", "").isalnum():
        return key
    return _toml_value(key)


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to TOML config file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    for key, value in config.items():
        if not isinstance(value, dict):
            lines.append(f"{_toml_key(key)} = {_toml_value(value)}")
    for key, value in config.items():
        if isinstance(value, dict):
            lines.append(f"[{_toml_key(key)}]")
            for k, v in value.items():
                lines.append(f"{_toml_key(k)} = {_toml_value(v)}")
            lines.append("")

    CONFIG_FILE.write_text("\n".join(lines) + "\n")


def get_base_url() -> str | None:
    """Base URL from FETCHERO_BASE_URL or the [client] table."""
    env_url = os.environ.get(ENV_BASE_URL)
    if env_url:
        return env_url

    client = load_config().get("client", {})
    if isinstance(client, dict) and client.get("base_url"):
        return str(client["base_url"])
    return None


def get_default_headers() -> dict[str, str]:
    """Headers from the [headers] table, values coerced to strings."""
    headers = load_config().get("headers", {})
    if not isinstance(headers, dict):
        return {}
    return {str(k): str(v) for k, v in headers.items()}


def get_timeout() -> float:
    """Request timeout in seconds (env var -> config file -> default)."""
    raw: Any = os.environ.get(ENV_TIMEOUT)
    if not raw:
        client = load_config().get("client", {})
        raw = client.get("timeout") if isinstance(client, dict) else None
    if raw in (None, ""):
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT
