"""Protocol definitions for exchange clients.

Client methods return the decoded value when the client wraps a blocking
:class:`~edp.rest.Dispatcher`, and an awaitable of it when it wraps an
:class:`~edp.rest.AsyncDispatcher`. Both protocols are runtime-checkable so
callers can ask whether a client offers an operation before calling it.
"""

from __future__ import annotations

from typing import Any, Awaitable, Protocol, TypeVar, Union, runtime_checkable

from .models import KData, OpenInterest, OrderResp, SymbolInfo, Ticker

T = TypeVar("T")

MaybeAwaitable = Union[T, Awaitable[T]]


@runtime_checkable
class PublicAPI(Protocol):
    """Market data endpoints that need no credentials."""

    def ping(self) -> MaybeAwaitable[dict]:
        """Test connectivity to the REST API."""
        ...

    def get_symbols(self) -> MaybeAwaitable[list[SymbolInfo]]:
        """Trading rules and precision for every listed symbol."""
        ...

    def get_ticker(self, symbol: str) -> MaybeAwaitable[Ticker]:
        """Best bid/ask for a symbol.

        Args:
            symbol: Trading symbol (e.g., 'BTCUSDT')
        """
        ...

    def get_klines(
        self,
        symbol: str,
        interval: str,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> MaybeAwaitable[list[KData]]:
        """Candles for a symbol.

        Args:
            symbol: Trading symbol
            interval: Candle interval (e.g., '1m', '1h', '1d')
            start_time: Start of the window in ms (optional)
            end_time: End of the window in ms (optional)
            limit: Maximum number of candles (optional)
        """
        ...

    def get_open_interest(self, symbol: str) -> MaybeAwaitable[OpenInterest]:
        """Open interest; spot markets raise :class:`~edp.errors.UnsupportedEndpoint`."""
        ...


@runtime_checkable
class PrivateAPI(Protocol):
    """Account and order endpoints; every call is signed."""

    def new_order(
        self,
        symbol: str,
        qty: float,
        price: float | None,
        type_: str,
        side: str,
        *,
        time_in_force: str | None = None,
        client_order_id: str | None = None,
        recv_window: int = ...,
        timestamp: int | None = None,
    ) -> MaybeAwaitable[OrderResp]:
        """Place an order.

        Args:
            symbol: Trading symbol
            qty: Order quantity
            price: Limit price, ``None`` for market orders
            type_: Order type ('LIMIT', 'MARKET', ...)
            side: 'BUY' or 'SELL'
        """
        ...

    def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        client_order_id: str | None = None,
        *,
        timestamp: int | None = None,
    ) -> MaybeAwaitable[Any]:
        ...

    def query_order(
        self,
        symbol: str,
        order_id: int | None = None,
        client_order_id: str | None = None,
        *,
        timestamp: int | None = None,
    ) -> MaybeAwaitable[Any]:
        ...

    def query_balance(self, *, timestamp: int | None = None) -> MaybeAwaitable[Any]:
        """Spot returns an account snapshot, futures a list of asset balances."""
        ...
