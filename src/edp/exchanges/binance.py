"""Binance spot endpoints and client."""

from __future__ import annotations

import logging
from operator import methodcaller

from pydantic import Field
from pydantic.alias_generators import to_camel

from ..errors import UnsupportedEndpoint
from ..rest.descriptor import Dialect, Request, RequestDescriptor
from .base import BaseExchangeClient
from .models import (
    AccountInfo,
    CancelOrderResult,
    ExchangeInfo,
    KData,
    NewOrderResult,
    QueryOrderResult,
    ServerTime,
    Ticker,
)

logger = logging.getLogger(__name__)

DEFAULT_RECV_WINDOW = 5000


class BinanceRequest(Request):
    """Binance names parameters in camelCase."""

    model_config = {"alias_generator": to_camel}


class Ping(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/api/v3/ping", has_payload=False, response_type=dict)


class GetServerTime(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/api/v3/time", has_payload=False, response_type=ServerTime)


class GetExchangeInfo(BinanceRequest):
    descriptor = RequestDescriptor(
        "GET", "/api/v3/exchangeInfo", has_payload=False, response_type=ExchangeInfo
    )


class GetTicker(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/api/v3/ticker/bookTicker", response_type=Ticker)

    symbol: str


class GetKlines(BinanceRequest):
    descriptor = RequestDescriptor("GET", "/api/v3/klines", response_type=list[KData])

    symbol: str
    interval: str
    start_time: int | None = None
    end_time: int | None = None
    limit: int | None = None


class NewOrder(BinanceRequest):
    descriptor = RequestDescriptor(
        "POST", "/api/v3/order", signed=Dialect.BINANCE, response_type=NewOrderResult
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


class CancelOrder(BinanceRequest):
    descriptor = RequestDescriptor(
        "DELETE", "/api/v3/order", signed=Dialect.BINANCE, response_type=CancelOrderResult
    )

    symbol: str
    order_id: int | None = None
    orig_client_order_id: str | None = None
    recv_window: int | None = DEFAULT_RECV_WINDOW
    timestamp: int | None = None


class QueryOrder(BinanceRequest):
    descriptor = RequestDescriptor(
        "GET", "/api/v3/order", signed=Dialect.BINANCE, response_type=QueryOrderResult
    )

    symbol: str
    order_id: int | None = None
    orig_client_order_id: str | None = None
    recv_window: int | None = DEFAULT_RECV_WINDOW
    timestamp: int | None = None


class GetAccount(BinanceRequest):
    descriptor = RequestDescriptor(
        "GET", "/api/v3/account", signed=Dialect.BINANCE, response_type=AccountInfo
    )

    recv_window: int | None = DEFAULT_RECV_WINDOW
    timestamp: int | None = None


_to_order_resp = methodcaller("to_order_resp")


def _order_id_args(order_id: int | None, client_order_id: str | None) -> dict:
    if order_id is None and client_order_id is None:
        raise ValueError("Binance requires order_id or client_order_id")
    return {"order_id": order_id, "orig_client_order_id": client_order_id}


class BinanceSpot(BaseExchangeClient):
    """Binance spot REST client."""

    name = "binance"
    base_url = "https://api.binance.com"
    sandbox_url = "https://testnet.binance.vision"
    order_request: type[BinanceRequest] = NewOrder

    def ping(self):
        return self._call(Ping())

    def get_server_time(self):
        return self._call(GetServerTime())

    def get_symbols(self):
        return self._call(GetExchangeInfo(), ExchangeInfo.symbol_infos)

    def get_ticker(self, symbol: str):
        return self._call(GetTicker(symbol=symbol.upper()))

    def get_klines(
        self,
        symbol: str,
        interval: str,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ):
        return self._call(
            GetKlines(
                symbol=symbol.upper(),
                interval=interval,
                start_time=start_time,
                end_time=end_time,
                limit=limit,
            )
        )

    def get_open_interest(self, symbol: str):
        raise UnsupportedEndpoint(self.name, "get_open_interest")

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
        recv_window: int = DEFAULT_RECV_WINDOW,
        timestamp: int | None = None,
    ):
        """Place an order and return the exchange-neutral acknowledgement."""
        if type_.upper() == "LIMIT" and time_in_force is None:
            time_in_force = "GTC"
        req = self._order_request(
            symbol, side, type_, qty, price, time_in_force, recv_window, client_order_id, timestamp
        )
        return self._call(req, _to_order_resp)

    def _order_request(
        self,
        symbol: str,
        side: str,
        type_: str,
        quantity: float,
        price: float | None,
        time_in_force: str | None,
        recv_window: int,
        client_order_id: str | None,
        timestamp: int | None,
    ) -> BinanceRequest:
        return self.order_request(
            symbol=symbol.upper(),
            side=side.upper(),
            type_=type_.upper(),
            quantity=quantity,
            price=price,
            time_in_force=time_in_force,
            new_client_order_id=client_order_id,
            recv_window=recv_window,
            timestamp=timestamp,
        )

    def limit_order(self, symbol: str, quantity: float, price: float, side: str, **kwargs):
        return self.new_order(symbol, quantity, price, "LIMIT", side, **kwargs)

    def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        client_order_id: str | None = None,
        *,
        timestamp: int | None = None,
    ):
        return self._call(
            CancelOrder(
                symbol=symbol.upper(),
                timestamp=timestamp,
                **_order_id_args(order_id, client_order_id),
            )
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
            QueryOrder(
                symbol=symbol.upper(),
                timestamp=timestamp,
                **_order_id_args(order_id, client_order_id),
            )
        )

    def query_balance(self, *, timestamp: int | None = None):
        return self._call(GetAccount(timestamp=timestamp))
