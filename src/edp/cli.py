"""Typer-based CLI for exchange REST calls."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .errors import EdpError, NoCredentialSet, UnsupportedEndpoint
from .exchanges.protocol import PrivateAPI, PublicAPI
from .rest.signing import canonical_query, sign_query

app = typer.Typer(help="Signed REST client for crypto exchanges")
console = Console()
logger = logging.getLogger(__name__)

_state: dict[str, Any] = {"config": None}

_REQUIRES = {
    "ping": PublicAPI,
    "get_ticker": PublicAPI,
    "get_klines": PublicAPI,
    "query_balance": PrivateAPI,
}


def _load_settings(config_path: Optional[Path] = None):
    from .config import load_settings
    return load_settings(config_path)


def _configure_logging(log_dir: Path | None = None):
    from .logging import configure_logging
    return configure_logging(log_dir)


def _make_client(exchange: str):
    """Build a client for ``exchange`` from the loaded settings."""
    from .exchanges.factory import create_exchange_client

    settings = _load_settings(_state["config"])
    exch = settings.exchanges.get(exchange)
    api_key = api_secret = None
    sandbox = False
    base_url = None
    if exch is not None:
        sandbox = exch.sandbox
        base_url = exch.base_url
        if exch.credentials:
            api_key = exch.credentials.api_key.get_secret_value()
            api_secret = exch.credentials.api_secret.get_secret_value()
    return create_exchange_client(
        exchange,
        api_key,
        api_secret,
        sandbox=sandbox,
        base_url=base_url,
        blocking=settings.http.blocking,
        timeout=settings.http.timeout,
        proxy=settings.proxy.as_dict(),
    )


async def _await_and_close(client, pending):
    try:
        return await pending
    finally:
        await client.close()


def _supports(client, method: str) -> bool:
    required = _REQUIRES.get(method)
    if required is not None and not isinstance(client, required):
        return False
    return callable(getattr(client, method, None))


def _resolve(client, exchange: str, command: str, method: str, *args: Any, **kwargs: Any) -> Any:
    try:
        if not _supports(client, method):
            raise UnsupportedEndpoint(exchange, command)
        result = getattr(client, method)(*args, **kwargs)
    except BaseException:
        closing = client.close()
        if inspect.isawaitable(closing):
            asyncio.run(closing)
        raise
    if inspect.isawaitable(result):
        return asyncio.run(_await_and_close(client, result))
    client.close()
    return result


def _call(exchange: str, command: str, method: str, *args: Any, **kwargs: Any) -> Any:
    try:
        client = _make_client(exchange)
        return _resolve(client, exchange, command, method, *args, **kwargs)
    except NoCredentialSet:
        console.print(f"[red]Error:[/red] no credentials configured for '{exchange}'")
        raise typer.Exit(1)
    except (EdpError, ValueError) as e:
        logger.error("%s.%s failed: %s", exchange, method, e)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def run_cli(argv: list[str] | None = None) -> None:
    """Run CLI with optional argv parameter."""
    app(argv)


def main() -> None:
    _configure_logging()
    run_cli()


@app.callback()
def _main(
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    _state["config"] = config


@app.command()
def ping(exchange: str = typer.Argument(..., help="Exchange name")) -> None:
    """Check connectivity to an exchange."""
    _call(exchange, "ping", "ping")
    console.print(f"[green]{exchange} is reachable[/green]")


@app.command()
def ticker(
    exchange: str = typer.Argument(..., help="Exchange name"),
    symbol: str = typer.Argument(..., help="Trading symbol"),
) -> None:
    """Show best bid/ask."""
    t = _call(exchange, "ticker", "get_ticker", symbol)
    table = Table(title=f"{t.symbol} on {exchange}")
    table.add_column("Side")
    table.add_column("Price", justify="right")
    table.add_column("Qty", justify="right")
    table.add_row("bid", f"{t.bid_price}", f"{t.bid_qty}")
    table.add_row("ask", f"{t.ask_price}", f"{t.ask_qty}")
    console.print(table)


@app.command()
def klines(
    exchange: str = typer.Argument(..., help="Exchange name"),
    symbol: str = typer.Argument(..., help="Trading symbol"),
    interval: str = typer.Option("1h", help="Candle interval"),
    limit: int = typer.Option(10, help="Number of candles"),
) -> None:
    """Show recent candles."""
    rows = _call(exchange, "klines", "get_klines", symbol, interval, limit=limit)
    table = Table(title=f"{symbol.upper()} {interval}")
    for col in ("Open time", "Open", "High", "Low", "Close", "Volume"):
        table.add_column(col, justify="right")
    for k in rows:
        table.add_row(str(k.ts), f"{k.open}", f"{k.high}", f"{k.low}", f"{k.close}", f"{k.vol}")
    console.print(table)


@app.command()
def balance(exchange: str = typer.Argument(..., help="Exchange name")) -> None:
    """Show account balances (signed)."""
    method = "get_wallet" if exchange.lower() == "bitmex" else "query_balance"
    result = _call(exchange, "balance", method)
    console.print_json(json.dumps(_dump(result)))


@app.command()
def sign(
    params: List[str] = typer.Argument(..., help="key=value pairs"),
    secret: str = typer.Option(..., help="Secret key", prompt=True, hide_input=True),
) -> None:
    """Print the canonical query string and its signature."""
    pairs: dict[str, str] = {}
    for item in params:
        key, sep, value = item.partition("=")
        if not sep or not key:
            console.print(f"[red]Error:[/red] expected key=value, got '{item}'")
            raise typer.Exit(1)
        pairs[key] = value
    console.print(Panel(canonical_query(pairs), title="canonical query"))
    console.print(sign_query(secret, pairs))


@app.command("config-show")
def config_show() -> None:
    """Print the effective configuration with secrets redacted."""
    try:
        settings = _load_settings(_state["config"])
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print_json(json.dumps(settings.redacted()))
