"""Typed response shapes for the supported endpoints."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def string_or_float(value: Any) -> float:
    """Accept a JSON number or a numeric string and return a float."""
    if isinstance(value, bool):
        raise ValueError("expected a number or numeric string, got bool")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"not a numeric string: {value!r}") from None
    raise ValueError(f"expected a number or numeric string, got {type(value).__name__}")


FloatStr = Annotated[float, BeforeValidator(string_or_float)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServerTime(CamelModel):
    server_time: int


class Ticker(CamelModel):
    symbol: str
    bid_price: FloatStr
    bid_qty: FloatStr
    ask_price: FloatStr
    ask_qty: FloatStr


class KData(BaseModel):
    """One candle; Binance sends klines as positional arrays."""

    ts: int
    open: FloatStr
    high: FloatStr
    low: FloatStr
    close: FloatStr
    vol: FloatStr
    turnover: FloatStr

    @model_validator(mode="before")
    @classmethod
    def _from_row(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) < 8:
                raise ValueError(f"kline row needs at least 8 columns, got {len(data)}")
            return {
                "ts": data[0],
                "open": data[1],
                "high": data[2],
                "low": data[3],
                "close": data[4],
                "vol": data[5],
                "turnover": data[7],
            }
        return data


class SymbolInfo(BaseModel):
    symbol: str
    base: str
    quote: str
    price_precision: int
    quantity_precision: int
    base_precision: int
    quote_precision: int


class RawSymbol(CamelModel):
    symbol: str
    status: str
    base_asset: str
    quote_asset: str
    base_asset_precision: int
    quote_precision: int
    # futures only
    price_precision: int | None = None
    quantity_precision: int | None = None
    order_types: list[str] = Field(default_factory=list)


class ExchangeInfo(CamelModel):
    timezone: str
    server_time: int
    symbols: list[RawSymbol]

    def symbol_infos(self) -> list[SymbolInfo]:
        infos = []
        for raw in self.symbols:
            price_precision = raw.price_precision
            if price_precision is None:
                price_precision = raw.quote_precision
            quantity_precision = raw.quantity_precision
            if quantity_precision is None:
                quantity_precision = raw.base_asset_precision
            infos.append(
                SymbolInfo(
                    symbol=raw.symbol,
                    base=raw.base_asset,
                    quote=raw.quote_asset,
                    price_precision=price_precision,
                    quantity_precision=quantity_precision,
                    base_precision=raw.base_asset_precision,
                    quote_precision=raw.quote_precision,
                )
            )
        return infos


class Balance(CamelModel):
    asset: str
    free: FloatStr
    locked: FloatStr


class AccountInfo(CamelModel):
    balances: list[Balance]
    can_trade: bool = True
    update_time: int | None = None


class FuturesBalance(CamelModel):
    asset: str
    balance: FloatStr
    available_balance: FloatStr


class OrderResp(BaseModel):
    """Exchange-neutral acknowledgement of an order action."""

    symbol: str
    order_id: int
    client_order_id: str
    transact_time: int


class NewOrderResult(CamelModel):
    symbol: str
    order_id: int
    order_list_id: int = -1
    client_order_id: str
    transact_time: int

    def to_order_resp(self) -> OrderResp:
        return OrderResp(
            symbol=self.symbol,
            order_id=self.order_id,
            client_order_id=self.client_order_id,
            transact_time=self.transact_time,
        )


class CancelOrderResult(CamelModel):
    symbol: str
    orig_client_order_id: str
    order_id: int
    order_list_id: int = -1
    client_order_id: str
    price: FloatStr
    orig_qty: FloatStr
    executed_qty: FloatStr
    cummulative_quote_qty: FloatStr
    status: str
    time_in_force: str
    type_field: str = Field(alias="type")
    side: str


class QueryOrderResult(CamelModel):
    symbol: str
    order_id: int
    order_list_id: int = -1
    client_order_id: str
    price: FloatStr
    orig_qty: FloatStr
    executed_qty: FloatStr
    cummulative_quote_qty: FloatStr
    status: str
    time_in_force: str
    type_field: str = Field(alias="type")
    side: str
    stop_price: FloatStr = 0.0
    iceberg_qty: FloatStr = 0.0
    time: int
    update_time: int
    is_working: bool
    orig_quote_order_qty: FloatStr = 0.0


class PerpetualOrderResp(CamelModel):
    order_id: int
    symbol: str
    status: str
    client_order_id: str
    price: FloatStr
    avg_price: FloatStr
    orig_qty: FloatStr
    executed_qty: FloatStr
    cum_qty: str | None = None
    cum_quote: FloatStr
    time_in_force: str
    type_field: str = Field(alias="type")
    reduce_only: bool
    close_position: bool = False
    side: str
    position_side: str
    stop_price: FloatStr = 0.0
    working_type: str | None = None
    orig_type: str | None = None
    update_time: int
    time: int | None = None

    def to_order_resp(self) -> OrderResp:
        return OrderResp(
            symbol=self.symbol,
            order_id=self.order_id,
            client_order_id=self.client_order_id,
            transact_time=self.update_time,
        )


class OrderBook(CamelModel):
    last_update_id: int
    bids: list[tuple[FloatStr, FloatStr]]
    asks: list[tuple[FloatStr, FloatStr]]


class OpenInterest(CamelModel):
    symbol: str
    open_interest: FloatStr
    time: int | None = None


# Huobi derivatives (snake_case on the wire)

class HbdmContractInfo(BaseModel):
    symbol: str
    contract_code: str
    contract_type: str
    contract_size: FloatStr
    price_tick: FloatStr
    delivery_date: str
    create_date: str
    contract_status: int


class HbdmContractInfoResp(BaseModel):
    status: str
    data: list[HbdmContractInfo]
    ts: int


class HbdmKline(BaseModel):
    id: int
    open: FloatStr
    high: FloatStr
    low: FloatStr
    close: FloatStr
    vol: FloatStr  # contracts, both sides
    amount: FloatStr  # base currency
    count: int


class HbdmKlineResp(BaseModel):
    status: str
    ch: str
    data: list[HbdmKline]
    ts: int


# BitMEX

class BitmexInstrument(CamelModel):
    symbol: str
    state: str
    tick_size: FloatStr | None = None


class BitmexWallet(CamelModel):
    account: int
    currency: str
    amount: FloatStr


class BitmexOrder(CamelModel):
    order_id: str = Field(alias="orderID")
    symbol: str
    side: str | None = None
    order_qty: FloatStr | None = None
    price: FloatStr | None = None
    ord_type: str | None = None
    ord_status: str
