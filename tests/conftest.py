"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture
def api_key():
    """Test API key."""
    return "test_api_key_123456"


@pytest.fixture
def api_secret():
    """Test API secret."""
    return "test_api_secret_789012"


@pytest.fixture
def fixed_clock():
    """Clock frozen at epoch second 1 (timestamp 1000 ms)."""
    return lambda: 1.0


@pytest.fixture
def sample_ticker_response():
    """Sample bookTicker response."""
    return {
        "symbol": "BTCUSDT",
        "bidPrice": "45000.00",
        "bidQty": "1.5",
        "askPrice": "45000.50",
        "askQty": "2.25",
    }


@pytest.fixture
def sample_kline_rows():
    """Two Binance kline rows."""
    return [
        [1499040000000, "0.01634790", "0.80000000", "0.01575800", "0.01577100",
         "148976.11427815", 1499644799999, "2434.19055334", 308, "1756.87402397",
         "28.46694368", "0"],
        [1499644800000, "0.01577100", "0.01600000", "0.01500000", "0.01580000",
         "1000.0", 1500249599999, "15.8", 12, "500.0", "7.9", "0"],
    ]


@pytest.fixture
def sample_new_order_response():
    """Sample spot order acknowledgement."""
    return {
        "symbol": "BTCUSDT",
        "orderId": 28,
        "orderListId": -1,
        "clientOrderId": "6gCrw2kRUAF9CvJDGP16IP",
        "transactTime": 1507725176595,
    }


@pytest.fixture
def sample_perpetual_order_response():
    """Sample futures order payload."""
    return {
        "clientOrderId": "testOrder",
        "cumQty": "0",
        "cumQuote": "0",
        "executedQty": "0",
        "orderId": 22542179,
        "avgPrice": "0.00000",
        "origQty": "10",
        "price": "9000",
        "reduceOnly": False,
        "side": "BUY",
        "positionSide": "BOTH",
        "status": "NEW",
        "stopPrice": "0",
        "closePosition": False,
        "symbol": "BTCUSDT",
        "timeInForce": "GTC",
        "type": "LIMIT",
        "origType": "LIMIT",
        "updateTime": 1566818724722,
        "workingType": "CONTRACT_PRICE",
    }


@pytest.fixture
def sample_account_response():
    """Sample spot account response."""
    return {
        "canTrade": True,
        "updateTime": 123456789,
        "balances": [
            {"asset": "BTC", "free": "0.5", "locked": "0.1"},
            {"asset": "USDT", "free": "1000.0", "locked": "0.0"},
        ],
    }
