"""Binance USDⓈ-M perpetual futures endpoints and client."""

from __future__ import annotations

import logging

from pydantic import Field

from ..rest.descriptor import Dialect, RequestDescriptor
from .binance import DEFAULT_RECV_WINDOW, BinanceRequest, BinanceSpot, _order_id_args
from .models import (
    ExchangeInfo,
    FuturesBalance,
    KData,
    OpenInterest,
    OrderBook,
    PerpetualOrderResp,
    ServerTime,
    Ticker,
)

logger = logging.getLogger(__name__)


class FuturesPing(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/fapi/v1/ping", has_payload=False, response_type=dict)


class FuturesServerTime(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/fapi/v1/time", has_payload=False, response_type=ServerTime)


class FuturesExchangeInfo(BinanceRequest):
    descriptor = RequestDescriptor(
        "GET", "/fapi/v1/exchangeInfo", has_payload=False, response_type=ExchangeInfo
    )


class FuturesTicker(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/fapi/v1/ticker/bookTicker", response_type=Ticker)

    symbol: str


class FuturesKlines(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/fapi/v1/klines", response_type=list[KData])

    symbol: str
    interval: str
    start_time: int | None = None
    end_time: int | None = None
    limit: int | None = None


class FuturesDepth(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/fapi/v1/depth", response_type=OrderBook)

    symbol: str
    limit: int | None = None


class FuturesOpenInterest(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/fapi/v1/openInterest", response_type=OpenInterest)

    symbol: str


class FuturesNewOrder(BinanceRequest):
    descriptor = RequestDescriptor(
        "POST", "/fapi/v1/order", signed=Dialect.BINANCE, response_type=PerpetualOrderResp
    )

    symbol: str
    side: str
    type_: str = Field(alias="type")
    quantity: float
    price: float | None = None
    time_in_force: str | None = None
    new_client_order_id: str | None = None
    recv_window: int | None = DEFAULT_RECV_WINDOW
    timestamp: int | None = None


class FuturesCancelOrder(BinanceRequest):
    descriptor = RequestDescriptor(
        "DELETE", "/fapi/v1/order", signed=Dialect.BINANCE, response_type=PerpetualOrderResp
    )

    symbol: str
    order_id: int | None = None
    orig_client_order_id: str | None = None
    recv_window: int | None = DEFAULT_RECV_WINDOW
    timestamp: int | None = None


class FuturesQueryOrder(BinanceRequest):
    descriptor = RequestDescriptor(
        "GET", "/fapi/v1/order", signed=Dialect.BINANCE, response_type=PerpetualOrderResp
    )

    symbol: str
    order_id: int | None = None
    orig_client_order_id: str | None = None
    recv_window: int | None = DEFAULT_RECV_WINDOW
    timestamp: int | None = None


class FuturesBalances(BinanceRequest):
    descriptor = RequestDescriptor(
        "GET", "/fapi/v2/balance", signed=Dialect.BINANCE, response_type=list[FuturesBalance]
    )

    recv_window: int | None = DEFAULT_RECV_WINDOW
    timestamp: int | None = None


class BinancePerpetual(BinanceSpot):
    """Binance perpetual futures REST client."""

    name = "binance_futures"
    base_url = "https://fapi.binance.com"
    sandbox_url = "https://testnet.binancefuture.com"
    order_request = FuturesNewOrder

    def ping(self):
        return self._call(FuturesPing())

    def get_server_time(self):
        return self._call(FuturesServerTime())

    def get_symbols(self):
        return self._call(FuturesExchangeInfo(), ExchangeInfo.symbol_infos)

    def get_ticker(self, symbol: str):
        return self._call(FuturesTicker(symbol=symbol.upper()))

    def get_klines(
        self,
        symbol: str,
        interval: str,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ):
        return self._call(
            FuturesKlines(
                symbol=symbol.upper(),
                interval=interval,
                start_time=start_time,
                end_time=end_time,
                limit=limit,
            )
        )

    def get_order_book(self, symbol: str, limit: int | None = None):
        # exchange default is 500 levels
        return self._call(FuturesDepth(symbol=symbol.upper(), limit=limit))

    def get_open_interest(self, symbol: str):
        return self._call(FuturesOpenInterest(symbol=symbol.upper()))

    def order(
        self,
        symbol: str,
        side: str,
        type_: str,
        quantity: float,
        price: float | None = None,
        time_in_force: str | None = "GTC",
        recv_window: int = DEFAULT_RECV_WINDOW,
        new_client_order_id: str | None = None,
        timestamp: int | None = None,
    ):
        """Place an order and return the full futures order payload."""
        return self._call(
            self._order_request(
                symbol,
                side,
                type_,
                quantity,
                price,
                time_in_force,
                recv_window,
                new_client_order_id,
                timestamp,
            )
        )

    def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        client_order_id: str | None = None,
        *,
        timestamp: int | None = None,
    ):
        return self._call(
            FuturesCancelOrder(
                symbol=symbol.upper(),
                timestamp=timestamp,
                **_order_id_args(order_id, client_order_id),
            ),
            PerpetualOrderResp.to_order_resp,
        )

    def query_order(
        self,
        symbol: str,
        order_id: int | None = None,
        client_order_id: str | None = None,
        *,
        timestamp: int | None = None,
    ):
        return self._call(
            FuturesQueryOrder(
                symbol=symbol.upper(),
                timestamp=timestamp,
                **_order_id_args(order_id, client_order_id),
            ),
            PerpetualOrderResp.to_order_resp,
        )

    def query_balance(self, *, timestamp: int | None = None):
        return self._call(FuturesBalances(timestamp=timestamp))
