"""Tests for CLI command parsing and basic functionality."""

from __future__ import annotations

import json
from unittest.mock import Mock, patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from edp.cli import app
from edp.errors import NoCredentialSet, RemoteError
from edp.exchanges.bitmex import Bitmex
from edp.exchanges.hbdm import Hbdm
from edp.exchanges.models import Balance, AccountInfo, KData, Ticker


def wide_console():
    return Console(width=300)


def test_cli_help():
    """Test that CLI shows help correctly."""
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Signed REST client for crypto exchanges" in result.output


def test_cli_commands_available():
    """Test that all expected CLI commands are available."""
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("ping", "ticker", "klines", "balance", "sign", "config-show"):
        assert command in result.output


@patch("edp.cli._make_client")
def test_ping(mock_make_client):
    client = Mock()
    client.ping.return_value = {}
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, ["ping", "binance"])

    assert result.exit_code == 0
    assert "binance is reachable" in result.output
    mock_make_client.assert_called_once_with("binance")
    client.close.assert_called_once()


@patch("edp.cli.console", new_callable=wide_console)
@patch("edp.cli._make_client")
def test_ticker_table(mock_make_client, _console):
    client = Mock()
    client.get_ticker.return_value = Ticker(
        symbol="BTCUSDT", bid_price=45000.0, bid_qty=1.5, ask_price=45000.5, ask_qty=2.25
    )
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, ["ticker", "binance", "BTCUSDT"])

    assert result.exit_code == 0
    assert "BTCUSDT on binance" in result.output
    assert "45000.5" in result.output
    assert "2.25" in result.output
    client.get_ticker.assert_called_once_with("BTCUSDT")


@patch("edp.cli.console", new_callable=wide_console)
@patch("edp.cli._make_client")
def test_klines_options(mock_make_client, _console):
    client = Mock()
    client.get_klines.return_value = [
        KData(ts=1499040000000, open=1, high=2, low=0.5, close=1.5, vol=10, turnover=15)
    ]
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, ["klines", "binance", "btcusdt", "--interval", "1d", "--limit", "1"])

    assert result.exit_code == 0
    assert "1499040000000" in result.output
    client.get_klines.assert_called_once_with("btcusdt", "1d", limit=1)


@patch("edp.cli._make_client")
def test_balance_json(mock_make_client):
    client = Mock()
    client.query_balance.return_value = AccountInfo(
        balances=[Balance(asset="BTC", free=0.5, locked=0.1)]
    )
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, ["balance", "binance"])

    assert result.exit_code == 0
    assert '"asset": "BTC"' in result.output


@patch("edp.cli._make_client")
def test_balance_bitmex_uses_wallet(mock_make_client):
    client = Mock()
    client.get_wallet.return_value = {"amount": 1}
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, ["balance", "bitmex"])

    assert result.exit_code == 0
    client.get_wallet.assert_called_once_with()
    client.query_balance.assert_not_called()


@patch("edp.cli._make_client")
def test_balance_without_credentials(mock_make_client):
    client = Mock()
    client.query_balance.side_effect = NoCredentialSet()
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, ["balance", "binance"])

    assert result.exit_code == 1
    assert "no credentials configured for 'binance'" in result.output
    client.close.assert_called_once()


@patch("edp.cli._make_client")
def test_remote_error_exits_nonzero(mock_make_client):
    client = Mock()
    client.get_ticker.side_effect = RemoteError(-1121, "Invalid symbol.")
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, ["ticker", "binance", "NOPE"])

    assert result.exit_code == 1
    assert "Invalid symbol." in result.output


@patch("edp.cli._make_client")
def test_unsupported_exchange(mock_make_client):
    mock_make_client.side_effect = ValueError("Unsupported exchange: kraken")

    result = CliRunner().invoke(app, ["ping", "kraken"])

    assert result.exit_code == 1
    assert "Unsupported exchange" in result.output


@patch("edp.cli.console", new_callable=wide_console)
def test_sign_prints_signed_query(_console):
    result = CliRunner().invoke(
        app, ["sign", "timestamp=1000", "symbol=BTCUSDT", "--secret", "testsecret"]
    )

    assert result.exit_code == 0
    assert "symbol=BTCUSDT&timestamp=1000" in result.output
    assert (
        "symbol=BTCUSDT&timestamp=1000"
        "&signature=de539f52cf9eac1f067bf86aa8a866f41bf2c7264b72dc4d51eafff2aee74afc"
    ) in result.output


def test_sign_rejects_malformed_pair():
    result = CliRunner().invoke(app, ["sign", "symbol", "--secret", "s"])
    assert result.exit_code == 1
    assert "expected key=value" in result.output


def test_config_show_redacts(tmp_path, monkeypatch):
    monkeypatch.delenv("EDP_CONFIG", raising=False)
    path = tmp_path / "config.yml"
    path.write_text(
        "exchanges:\n"
        "  binance:\n"
        "    credentials:\n"
        "      api_key: plainkey\n"
        "      api_secret: plainsecret\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["--config", str(path), "config-show"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["exchanges"]["binance"]["credentials"]["api_key"] == "***"
    assert "plainsecret" not in result.output


def test_config_show_invalid(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("bogus: 1\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["--config", str(path), "config-show"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


@pytest.mark.parametrize(
    "exchange,args,client_cls",
    [
        ("hbdm", ["ticker", "hbdm", "BTC_CQ"], Hbdm),
        ("hbdm", ["klines", "hbdm", "BTC_CQ"], Hbdm),
        ("hbdm", ["balance", "hbdm"], Hbdm),
        ("bitmex", ["ping", "bitmex"], Bitmex),
    ],
)
@patch("edp.cli._make_client")
def test_command_not_offered_by_exchange(mock_make_client, exchange, args, client_cls):
    client = client_cls(blocking=True)
    client.dispatcher._ensure_session = Mock()
    mock_make_client.return_value = client

    result = CliRunner().invoke(app, args)

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert f"{exchange} does not support {args[0]}" in result.output
    client.dispatcher._ensure_session.assert_not_called()
