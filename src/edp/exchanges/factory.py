"""Factory for creating exchange client instances."""

from __future__ import annotations

from typing import Any, Type

from ..rest.dispatcher import ProxyConfig
from .base import BaseExchangeClient
from .binance import BinanceSpot
from .binance_futures import BinancePerpetual
from .bitmex import Bitmex
from .hbdm import Hbdm


EXCHANGE_CLIENTS: dict[str, Type[BaseExchangeClient]] = {
    "binance": BinanceSpot,
    "binance_futures": BinancePerpetual,
    "hbdm": Hbdm,
    "bitmex": Bitmex,
}


def create_exchange_client(
    exchange: str,
    api_key: str | None = None,
    api_secret: str | None = None,
    *,
    sandbox: bool = False,
    base_url: str | None = None,
    blocking: bool = False,
    timeout: float = 10.0,
    proxy: dict[str, Any] | None = None,
) -> BaseExchangeClient:
    """Create an exchange client instance.

    Args:
        exchange: Exchange name (binance, binance_futures, hbdm, bitmex)
        api_key: API key (optional; omit for public-only clients)
        api_secret: API secret
        sandbox: Use sandbox/testnet environment
        base_url: Override the REST host
        blocking: Use the blocking transport
        timeout: Per-request timeout in seconds
        proxy: Proxy configuration (url, username, password)

    Returns:
        Configured exchange client

    Raises:
        ValueError: If exchange is not supported
    """
    exchange_lower = exchange.lower()

    if exchange_lower not in EXCHANGE_CLIENTS:
        supported = ", ".join(EXCHANGE_CLIENTS.keys())
        raise ValueError(
            f"Unsupported exchange: {exchange}. Supported exchanges: {supported}"
        )

    client_class = EXCHANGE_CLIENTS[exchange_lower]

    proxy_config = None
    if proxy:
        proxy_config = ProxyConfig(
            url=proxy.get("url"),
            username=proxy.get("username"),
            password=proxy.get("password"),
        )

    return client_class(
        api_key,
        api_secret,
        sandbox=sandbox,
        base_url=base_url,
        blocking=blocking,
        timeout=timeout,
        proxy=proxy_config,
    )
