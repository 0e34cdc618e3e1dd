"""Huobi derivatives (HBDM) market data."""

from __future__ import annotations

from pydantic import Field

from ..rest.descriptor import Request, RequestDescriptor
from .base import BaseExchangeClient
from .models import HbdmContractInfoResp, HbdmKlineResp


class GetContractInfo(Request):
    descriptor = RequestDescriptor(
        "GET", "/api/v1/contract_contract_info", response_type=HbdmContractInfoResp
    )

    symbol: str | None = None
    contract_type: str | None = None
    contract_code: str | None = None


class GetHistoryKline(Request):
    descriptor = RequestDescriptor("GET", "/market/history/kline", response_type=HbdmKlineResp)

    symbol: str
    period: str
    size: int | None = None
    from_: int | None = Field(default=None, alias="from")
    to: int | None = None


class Hbdm(BaseExchangeClient):
    """Huobi derivatives REST client (public endpoints)."""

    name = "hbdm"
    base_url = "https://api.hbdm.com"

    def get_contract_info(
        self,
        symbol: str | None = None,
        contract_type: str | None = None,
        contract_code: str | None = None,
    ):
        return self._call(
            GetContractInfo(symbol=symbol, contract_type=contract_type, contract_code=contract_code)
        )

    def get_kline(
        self,
        symbol: str,
        period: str,
        from_: int | None = None,
        to: int | None = None,
        size: int | None = None,
    ):
        """History candles; ``from_``/``to`` are epoch seconds, e.g. symbol ``BTC_CQ``."""
        return self._call(GetHistoryKline(symbol=symbol, period=period, from_=from_, to=to, size=size))
