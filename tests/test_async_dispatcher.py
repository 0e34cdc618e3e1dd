"""Tests for the aiohttp-backed dispatcher."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from edp.errors import (
    DeserializationError,
    NoCredentialSet,
    RemoteError,
    RemoteServerError,
    TransportError,
)
from edp.rest.descriptor import Dialect, Request, RequestDescriptor
from edp.rest.dispatcher import AsyncDispatcher, Dispatcher


class SignedTicker(Request):
    descriptor = RequestDescriptor("GET", "/ticker", signed=Dialect.BINANCE, response_type=dict)

    symbol: str


class PublicPing(Request):
    descriptor = RequestDescriptor("GET", "/ping", has_payload=False, response_type=dict)


def create_async_response(status=200, json_data=None, text=None):
    """Create a mock async response."""
    resp = AsyncMock()
    resp.status = status
    body = text if text is not None else json.dumps(json_data if json_data is not None else {})
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp.read = AsyncMock(return_value=body)
    resp.__aenter__ = AsyncMock(return_value=resp)
    resp.__aexit__ = AsyncMock(return_value=None)
    return resp


def attach_session(dispatcher, response):
    session = MagicMock()
    session.request = MagicMock(return_value=response)
    dispatcher._ensure_session = AsyncMock(return_value=session)
    return session


class TestAsyncDispatch:
    """Tests for AsyncDispatcher."""

    @pytest.mark.asyncio
    async def test_signed_request(self, fixed_clock):
        dispatcher = AsyncDispatcher.with_credential(
            "https://api.binance.com", "key", "testsecret", clock=fixed_clock
        )
        session = attach_session(dispatcher, create_async_response(200, {"symbol": "BTCUSDT"}))

        result = await dispatcher.dispatch(SignedTicker(symbol="BTCUSDT"))

        assert result == {"symbol": "BTCUSDT"}
        args, kwargs = session.request.call_args
        assert args[0] == "GET"
        assert str(args[1]) == (
            "https://api.binance.com/ticker?symbol=BTCUSDT&timestamp=1000"
            "&signature=de539f52cf9eac1f067bf86aa8a866f41bf2c7264b72dc4d51eafff2aee74afc"
        )
        assert kwargs["headers"]["X-MBX-APIKEY"] == "key"
        assert kwargs["data"] is None

        await dispatcher.close()

    @pytest.mark.asyncio
    async def test_same_wire_request_as_blocking(self, fixed_clock):
        blocking = Dispatcher.with_credential("https://api.binance.com", "key", "s", clock=fixed_clock)
        suspending = AsyncDispatcher.with_credential("https://api.binance.com", "key", "s", clock=fixed_clock)
        req = SignedTicker(symbol="ETHUSDT")
        assert blocking.prepare(req) == suspending.prepare(req)

    @pytest.mark.asyncio
    async def test_no_credentials_no_network(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        session = attach_session(dispatcher, create_async_response())

        with pytest.raises(NoCredentialSet):
            await dispatcher.dispatch(SignedTicker(symbol="BTCUSDT"))

        dispatcher._ensure_session.assert_not_called()
        session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsigned_without_credentials(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        attach_session(dispatcher, create_async_response(200, {}))

        assert await dispatcher.dispatch(PublicPing()) == {}

    @pytest.mark.asyncio
    async def test_remote_error(self, fixed_clock):
        dispatcher = AsyncDispatcher.with_credential("https://api.binance.com", "k", "s", clock=fixed_clock)
        attach_session(
            dispatcher,
            create_async_response(
                400,
                {"code": -1021, "msg": "Timestamp for this request is outside of the recvWindow."},
            ),
        )

        with pytest.raises(RemoteError) as excinfo:
            await dispatcher.dispatch(SignedTicker(symbol="BTCUSDT"))
        assert excinfo.value.code == -1021

    @pytest.mark.asyncio
    async def test_server_error(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        attach_session(dispatcher, create_async_response(503, text="Service Unavailable"))

        with pytest.raises(RemoteServerError):
            await dispatcher.dispatch(PublicPing())

    @pytest.mark.asyncio
    async def test_deserialization_error(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        attach_session(dispatcher, create_async_response(200, text="[1, 2, 3]"))

        with pytest.raises(DeserializationError) as excinfo:
            await dispatcher.dispatch(PublicPing())
        assert excinfo.value.body == "[1, 2, 3]"

    @pytest.mark.asyncio
    async def test_client_error_is_transport_error(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        session = attach_session(dispatcher, None)
        session.request.side_effect = aiohttp.ClientConnectionError("refused")

        with pytest.raises(TransportError):
            await dispatcher.dispatch(PublicPing())

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        resp = create_async_response()
        resp.__aenter__ = AsyncMock(side_effect=asyncio.TimeoutError())
        session = attach_session(dispatcher, resp)

        with pytest.raises(TransportError):
            await dispatcher.dispatch(PublicPing())
        session.request.assert_called_once()

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self):
        async with AsyncDispatcher("https://api.binance.com") as dispatcher:
            session = await dispatcher._ensure_session()
            assert not session.closed
        assert session.closed
        assert dispatcher.session is None

    @pytest.mark.asyncio
    async def test_invalid_utf8_body_is_deserialization_error(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        attach_session(dispatcher, create_async_response(200, text=b'{"a": "\xff"}'))

        with pytest.raises(DeserializationError) as excinfo:
            await dispatcher.dispatch(PublicPing())
        assert excinfo.value.body == '{"a": "\ufffd"}'

    @pytest.mark.asyncio
    async def test_invalid_utf8_error_body_keeps_status_mapping(self):
        dispatcher = AsyncDispatcher("https://api.binance.com")
        attach_session(dispatcher, create_async_response(502, text=b"\xff\xfe gateway"))

        with pytest.raises(RemoteServerError) as excinfo:
            await dispatcher.dispatch(PublicPing())
        assert excinfo.value.status == 502
