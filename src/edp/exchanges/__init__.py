"""Exchange endpoint definitions and clients."""

from .base import BaseExchangeClient
from .binance import BinanceSpot
from .binance_futures import BinancePerpetual
from .bitmex import Bitmex
from .factory import EXCHANGE_CLIENTS, create_exchange_client
from .hbdm import Hbdm
from .protocol import PrivateAPI, PublicAPI

__all__ = [
    "BaseExchangeClient",
    "BinanceSpot",
    "BinancePerpetual",
    "Bitmex",
    "Hbdm",
    "EXCHANGE_CLIENTS",
    "create_exchange_client",
    "PrivateAPI",
    "PublicAPI",
]
