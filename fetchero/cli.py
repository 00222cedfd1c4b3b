"""CLI application and commands for fetchero."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated, Any

import typer
from rich.console import Console

from fetchero.client import Fetchero
from fetchero.config import CONFIG_FILE, get_base_url, get_default_headers, get_timeout, load_config, save_config
from fetchero.display import display_envelope
from fetchero.errors import FetcheroError
from fetchero.validators import is_absolute_url

# Header value masking threshold
MIN_VALUE_LENGTH_FOR_MASKING = 8


class Method(str, Enum):
    """HTTP verbs accepted by the rest command."""

    get = "get"
    post = "post"
    put = "put"
    patch = "patch"
    delete = "delete"


class Operation(str, Enum):
    """GraphQL operation kinds."""

    query = "query"
    mutation = "mutation"
    subscription = "subscription"


def _version_callback(value: bool) -> None:
    if value:
        try:
            print(f"fetchero {version('fetchero')}")
        except PackageNotFoundError:
            print("fetchero (not installed)")
        raise typer.Exit


app = typer.Typer(
    name="fetchero",
    help="Send REST and GraphQL requests from the command line.",
    no_args_is_help=True,
)


@app.callback()
def _main(
    _version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=_version_callback, is_eager=True, help="Show version and exit."),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log request details to stderr.")] = False,
) -> None:
    """Send REST and GraphQL requests from the command line."""
    if verbose:
        logging.basicConfig(stream=sys.stderr, level=logging.DEBUG, format="%(name)s: %(message)s")


console = Console()


# ============================================================================
# Option parsing
# ============================================================================


def _parse_pairs(items: list[str] | None, sep: str, what: str) -> dict[str, str]:
    """Split ``KEY<sep>VALUE`` items into a dict."""
    result: dict[str, str] = {}
    for item in items or []:
        if sep not in item:
            console.print(f"[red]Error: {what} must use KEY{sep}VALUE format: {item}[/red]")
            raise typer.Exit(1)
        key, value = item.split(sep, 1)
        result[key.strip()] = value.strip()
    return result


def _parse_value(raw: str) -> Any:
    """JSON when it parses, the raw string otherwise."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_gql_args(items: list[str] | None) -> dict[str, Any]:
    """Parse ``name=value`` and ``name:Type=value`` argument options."""
    args: dict[str, Any] = {}
    for name, raw in _parse_pairs(items, "=", "Argument").items():
        value = _parse_value(raw)
        if ":" in name:
            name, gql_type = (part.strip() for part in name.split(":", 1))
            args[name] = {"type": gql_type, "value": value}
        else:
            args[name] = value
    return args


def _build_client(base: str | None) -> Fetchero:
    base_url = base or get_base_url()
    if not base_url:
        console.print("[red]Error: No base URL. Pass --base or run: fetchero config --set-base URL[/red]")
        raise typer.Exit(1)
    try:
        return Fetchero.from_config(base_url=base_url)
    except FetcheroError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def _finish(envelope: Any, json_output: bool) -> None:
    display_envelope(envelope, console, json_output=json_output)
    if isinstance(envelope, dict) and envelope.get("errors"):
        raise typer.Exit(1)


# ============================================================================
# Commands
# ============================================================================


@app.command()
def rest(
    method: Annotated[Method, typer.Argument(help="HTTP method", case_sensitive=False)],
    path: Annotated[str, typer.Argument(help="Path relative to the base URL, e.g. api/v1/users/123")],
    query: Annotated[list[str] | None, typer.Option("--query", "-q", help="Query parameter KEY=VALUE")] = None,
    header: Annotated[list[str] | None, typer.Option("--header", "-H", help="Header 'Name: value'")] = None,
    body: Annotated[str | None, typer.Option("--body", "-d", help="Request body (JSON or raw text)")] = None,
    base: Annotated[str | None, typer.Option("--base", "-b", help="Base URL override")] = None,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Print the whole envelope as JSON")] = False,
) -> None:
    """Send a REST request.

    Examples:
        fetchero rest get api/v1/users -q page=2
        fetchero rest post users -d '{"name": "Ada"}' -H "Authorization: Bearer x"
    """
    headers = _parse_pairs(header, ":", "Header")
    params = _parse_pairs(query, "=", "Query parameter")
    payload = _parse_value(body) if body is not None else None

    async def _run() -> Any:
        async with _build_client(base) as client:
            node = client.rest
            for segment in (s for s in path.split("/") if s):
                node = node[segment]
            verb = getattr(node, method.value)
            return await verb(query=params, body=payload, headers=headers)

    try:
        envelope = asyncio.run(_run())
    except FetcheroError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    _finish(envelope, json_output)


@app.command()
def gql(
    operation: Annotated[Operation, typer.Argument(help="Operation kind", case_sensitive=False)],
    field: Annotated[str, typer.Argument(help="Root field name")],
    arg: Annotated[
        list[str] | None,
        typer.Option("--arg", "-a", help="Argument name=value, or name:Type=value for a variable"),
    ] = None,
    select: Annotated[str | None, typer.Option("--select", "-s", help="Selection set, e.g. 'id name'")] = None,
    header: Annotated[list[str] | None, typer.Option("--header", "-H", help="Header 'Name: value'")] = None,
    base: Annotated[str | None, typer.Option("--base", "-b", help="GraphQL endpoint override")] = None,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Print the whole envelope as JSON")] = False,
) -> None:
    """Send a GraphQL operation.

    Examples:
        fetchero gql query user -a 'id:ID!=1' -s 'id name'
        fetchero gql mutation createUser -a name='"Ada"' -s id
    """
    headers = _parse_pairs(header, ":", "Header")
    args = parse_gql_args(arg)

    async def _run() -> Any:
        async with _build_client(base) as client:
            builder = getattr(client.gql, operation.value)[field](args)
            if headers:
                builder = builder.headers(headers)
            return await (builder.select(select) if select else builder.execute())

    try:
        envelope = asyncio.run(_run())
    except FetcheroError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    _finish(envelope, json_output)


@app.command()
def config(
    _show: Annotated[bool, typer.Option("--show", help="Show current config (default)")] = False,
    set_base: Annotated[str | None, typer.Option("--set-base", help="Set default base URL")] = None,
    set_header: Annotated[str | None, typer.Option("--set-header", help="Set default header (NAME=VALUE)")] = None,
    set_timeout: Annotated[float | None, typer.Option("--set-timeout", help="Set request timeout in seconds")] = None,
) -> None:
    """Manage configuration."""
    if set_base:
        if not is_absolute_url(set_base):
            console.print(f"[red]Error: Invalid URL: {set_base}[/red]")
            raise typer.Exit(1)
        cfg = load_config()
        cfg.setdefault("client", {})["base_url"] = set_base
        save_config(cfg)
        console.print(f"[green]Base URL saved to {CONFIG_FILE}[/green]")
        return

    if set_header:
        name, value = next(iter(_parse_pairs([set_header], "=", "Header").items()))
        cfg = load_config()
        cfg.setdefault("headers", {})[name] = value
        save_config(cfg)
        console.print(f"[green]Header {name} saved to {CONFIG_FILE}[/green]")
        return

    if set_timeout is not None:
        if set_timeout <= 0:
            console.print("[red]Error: Timeout must be positive[/red]")
            raise typer.Exit(1)
        cfg = load_config()
        cfg.setdefault("client", {})["timeout"] = set_timeout
        save_config(cfg)
        console.print(f"[green]Timeout set to {set_timeout}s[/green]")
        return

    console.print(f"[bold]Config file:[/bold] {CONFIG_FILE}")
    console.print(f"[bold]Config exists:[/bold] {CONFIG_FILE.exists()}")
    console.print(f"[bold]Base URL:[/bold] {get_base_url() or '[yellow]Not set[/yellow]'}")
    console.print(f"[bold]Timeout:[/bold] {get_timeout()}s")

    headers = get_default_headers()
    console.print()
    console.print("[bold]Default headers:[/bold]")
    if not headers:
        console.print("  [dim](none)[/dim]")
    for name, value in sorted(headers.items()):
        masked = value[:4] + "..." + value[-4:] if len(value) > MIN_VALUE_LENGTH_FOR_MASKING else "***"
        console.print(f"  {name}: {masked}")

    console.print()
    console.print("[dim]Set base URL with: fetchero config --set-base https://api.example.com[/dim]")
    console.print("[dim]Set headers with:  fetchero config --set-header Authorization='Bearer TOKEN'[/dim]")


def main() -> int:
    """Main entry point."""
    app()
    return 0


if __name__ == "__main__":
    sys.exit(main())
