"""BitMEX endpoints, signed with expiring request headers."""

from __future__ import annotations

from pydantic import Field
from pydantic.alias_generators import to_camel

from ..rest.descriptor import Dialect, Request, RequestDescriptor
from .base import BaseExchangeClient
from .models import BitmexInstrument, BitmexOrder, BitmexWallet


class BitmexRequest(Request):
    model_config = {"alias_generator": to_camel}


class GetInstruments(BitmexRequest):
    descriptor = RequestDescriptor(
        "GET", "/api/v1/instrument/active", has_payload=False, response_type=list[BitmexInstrument]
    )


class GetWallet(BitmexRequest):
    descriptor = RequestDescriptor(
        "GET", "/api/v1/user/wallet", signed=Dialect.BITMEX, response_type=BitmexWallet
    )

    currency: str | None = None


class PlaceOrder(BitmexRequest):
    descriptor = RequestDescriptor(
        "POST", "/api/v1/order", signed=Dialect.BITMEX, response_type=BitmexOrder
    )

    symbol: str
    side: str
    order_qty: float
    price: float | None = None
    ord_type: str = "Limit"


class CancelOrders(BitmexRequest):
    descriptor = RequestDescriptor(
        "DELETE", "/api/v1/order", signed=Dialect.BITMEX, response_type=list[BitmexOrder]
    )

    order_id: str = Field(alias="orderID")


class Bitmex(BaseExchangeClient):
    """BitMEX REST client."""

    name = "bitmex"
    base_url = "https://www.bitmex.com"
    sandbox_url = "https://testnet.bitmex.com"

    def get_instruments(self):
        return self._call(GetInstruments())

    def get_wallet(self, currency: str | None = "XBt"):
        return self._call(GetWallet(currency=currency))

    def place_order(self, symbol: str, side: str, order_qty: float, price: float | None = None, ord_type: str = "Limit"):
        return self._call(
            PlaceOrder(symbol=symbol, side=side, order_qty=order_qty, price=price, ord_type=ord_type)
        )

    def cancel_order(self, order_id: str):
        return self._call(CancelOrders(order_id=order_id))
