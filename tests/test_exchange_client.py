"""
Tests for credential discovery and the ccxt exchange wrapper.
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from crypto_mcp.credentials import CredentialStore, ExchangeCredentials
from crypto_mcp.exceptions import ExchangeNotConfiguredError, ValidationError
from crypto_mcp.exchange_client import ExchangeClient
from crypto_mcp.settings import settings

BINANCE_ENV = {"BINANCE_API_KEY": "key", "BINANCE_SECRET": "secret"}


class TestCredentialStore:
    """Test credential resolution from the environment and the YAML file."""

    def test_environment_credentials(self):
        store = CredentialStore(environ={"OKX_API_KEY": "k", "OKX_API_SECRET": "s", "OKX_PASSPHRASE": "p", "OKX_SANDBOX": "true"})

        credentials = store.get("OKX")

        assert credentials.id == "okx"
        assert credentials.to_ccxt_options() == {"apiKey": "k", "secret": "s", "password": "p"}
        assert credentials.sandbox is True

    def test_incomplete_credentials_ignored(self):
        store = CredentialStore(environ={"BINANCE_API_KEY": "key"})

        assert store.get("binance") is None
        assert store.configured_exchanges(["binance"]) == []

    def test_incomplete_environment_falls_back_to_file(self, tmp_path):
        config = tmp_path / "exchanges.yml"
        config.write_text("exchanges:\n  - id: okx\n    api_key: file-key\n    secret: file-secret\n")

        store = CredentialStore(config, environ={"OKX_API_KEY": "env-key"})

        credentials = store.get("okx")
        assert credentials is not None
        assert credentials.api_key == "file-key"
        assert store.configured_exchanges(["okx"]) == ["okx"]

    def test_yaml_file(self, tmp_path):
        config = tmp_path / "exchanges.yml"
        config.write_text(
            "exchanges:\n"
            "  - id: Kucoin\n"
            "    api_key: file-key\n"
            "    secret: file-secret\n"
            "    password: phrase\n"
        )

        store = CredentialStore(config, environ={})

        assert store.get("kucoin").password == "phrase"
        assert store.configured_exchanges(["binance", "kucoin"]) == ["kucoin"]

    def test_environment_wins_over_file(self, tmp_path):
        config = tmp_path / "exchanges.yml"
        config.write_text("exchanges:\n  - id: binance\n    api_key: file-key\n    secret: file-secret\n")

        store = CredentialStore(config, environ=BINANCE_ENV)

        assert store.get("binance").api_key == "key"

    def test_broken_file_recorded(self, tmp_path, caplog):
        config = tmp_path / "exchanges.yml"
        config.write_text("exchanges:\n  - id: ''\n")

        with caplog.at_level(logging.WARNING):
            store = CredentialStore(config, environ={})

        assert store.load_error.startswith("Failed to load credentials file")
        assert store.get("binance") is None
        assert "Failed to load credentials file" in caplog.text

    def test_missing_file(self, tmp_path):
        store = CredentialStore(tmp_path / "missing.yml", environ={})

        assert store.load_error is None

    def test_credentials_completeness(self):
        assert not ExchangeCredentials(id="binance", api_key="  ", secret="s").is_complete


class TestExchangeClient:
    """Test exchange resolution and instance management."""

    def test_default_exchange_warning(self, caplog):
        client = ExchangeClient(CredentialStore(environ={}))

        with caplog.at_level(logging.WARNING):
            exchange_id = client.resolve_exchange_id(None)

        assert exchange_id == settings.default_exchange
        assert f"No exchange specified, defaulting to {settings.default_exchange}." in caplog.text

    def test_unsupported_exchange(self):
        client = ExchangeClient(CredentialStore(environ={}))

        with pytest.raises(ValidationError, match="Unsupported exchange 'nope'"):
            client.resolve_exchange_id("nope")

    @pytest.mark.asyncio
    async def test_instance_cached_with_config(self, monkeypatch):
        monkeypatch.setattr(settings, "request_timeout_ms", 10000)
        monkeypatch.setattr(settings, "enable_rate_limit", True)
        client = ExchangeClient(CredentialStore(environ=BINANCE_ENV))

        with patch("crypto_mcp.exchange_client.ccxt_async") as ccxt_async:
            first = await client.get_exchange("Binance")
            second = await client.get_exchange("binance", authenticated=True)

        assert first is second
        ccxt_async.binance.assert_called_once_with(
            {"enableRateLimit": True, "timeout": 10000, "apiKey": "key", "secret": "secret"}
        )
        first.set_sandbox_mode.assert_not_called()
        assert client.current_exchange_id == "binance"

    @pytest.mark.asyncio
    async def test_public_instance_without_credentials(self):
        client = ExchangeClient(CredentialStore(environ={}))

        with patch("crypto_mcp.exchange_client.ccxt_async") as ccxt_async:
            await client.get_exchange("okx")

        config = ccxt_async.okx.call_args.args[0]
        assert "apiKey" not in config

    @pytest.mark.asyncio
    async def test_sandbox_mode(self):
        client = ExchangeClient(CredentialStore(environ={**BINANCE_ENV, "BINANCE_SANDBOX": "1"}))

        with patch("crypto_mcp.exchange_client.ccxt_async"):
            exchange = await client.get_exchange("binance")

        exchange.set_sandbox_mode.assert_called_once_with(True)

    @pytest.mark.asyncio
    async def test_authenticated_requires_credentials(self):
        client = ExchangeClient(CredentialStore(environ={}))

        with patch("crypto_mcp.exchange_client.ccxt_async") as ccxt_async:
            with pytest.raises(ExchangeNotConfiguredError, match="Set BYBIT_API_KEY and BYBIT_SECRET"):
                await client.get_exchange("bybit", authenticated=True)

        ccxt_async.bybit.assert_not_called()

    def test_check_exchange_configs(self):
        client = ExchangeClient(CredentialStore(environ=BINANCE_ENV))

        with patch("crypto_mcp.exchange_client.ccxt") as ccxt:
            ccxt.exchanges = ["binance", "okx", "broken"]
            ccxt.binance.return_value.name = "Binance"
            ccxt.okx.return_value.name = "OKX"
            ccxt.broken.side_effect = RuntimeError("boom")
            results = client.check_exchange_configs()

        assert results == [
            {"id": "binance", "name": "Binance", "ready": True, "error": None},
            {"id": "okx", "name": "OKX", "ready": False, "error": "Missing API key/secret"},
            {"id": "broken", "name": "broken", "ready": False, "error": "boom"},
        ]

    def test_available_exchanges(self):
        client = ExchangeClient(CredentialStore(environ=BINANCE_ENV))

        assert client.available_exchanges() == ["binance"]

    @pytest.mark.asyncio
    async def test_close(self):
        client = ExchangeClient(CredentialStore(environ={}))
        healthy = MagicMock(close=AsyncMock())
        failing = MagicMock(close=AsyncMock(side_effect=RuntimeError("closed")))
        client._exchanges = {"binance": healthy, "okx": failing}

        await client.close()

        healthy.close.assert_awaited_once()
        failing.close.assert_awaited_once()
        assert client._exchanges == {}
