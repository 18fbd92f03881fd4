"""
Tests for the MCP server surface: tool registration, schemas, middleware and resources.
"""

import inspect
import json
from unittest.mock import AsyncMock, patch

import pytest

from conftest import make_exchange
from crypto_mcp.exceptions import ExchangeNotConfiguredError, ToolError, ValidationError
from crypto_mcp.exchange_client import exchange_client
from crypto_mcp.middleware import handle_errors, with_exchange
from crypto_mcp.resources import project_intro_text, supported_exchanges_text
from crypto_mcp.server import analyze_logs, balance, mcp, prices

TOOL_NAMES = {
    "prices",
    "bookTickers",
    "depth",
    "prevDay",
    "candlesticks",
    "balance",
    "dustLog",
    "buy",
    "sell",
    "marketBuy",
    "marketSell",
    "orderStatus",
    "allOrders",
    "openOrders",
    "cancel",
    "cancelAll",
    "trades",
    "checkExchangeConfigs",
    "analyzeLogs",
    "calculateIndicators",
}

PROMPT_NAMES = {
    "marketAnalysis",
    "supportResistanceAnalysis",
    "indicatorAnalysis",
    "multiTimeframeAnalysis",
    "portfolioAnalysis",
    "tradingStatus",
    "queryAccountBalancePrompt",
    "logAnalysis",
    "createOrderPrompt",
    "cancelOrderPrompt",
    "getOpenOrdersPrompt",
}


class TestRegistration:
    """Test what the server exposes."""

    @pytest.mark.asyncio
    async def test_tools(self):
        tools = await mcp.list_tools()

        assert {tool.name for tool in tools} == TOOL_NAMES

    @pytest.mark.asyncio
    async def test_exchange_argument_replaces_client(self):
        tools = {tool.name: tool for tool in await mcp.list_tools()}

        properties = tools["prices"].inputSchema["properties"]
        assert "exchange" in properties
        assert "symbol" in properties
        assert "client" not in properties
        assert "symbol" in tools["depth"].inputSchema["required"]

    @pytest.mark.asyncio
    async def test_diagnostics_take_no_exchange(self):
        tools = {tool.name: tool for tool in await mcp.list_tools()}

        assert "exchange" not in tools["analyzeLogs"].inputSchema["properties"]

    @pytest.mark.asyncio
    async def test_prompts(self):
        prompts = await mcp.list_prompts()

        assert {prompt.name for prompt in prompts} == PROMPT_NAMES

    @pytest.mark.asyncio
    async def test_resources(self):
        resources = await mcp.list_resources()

        assert {str(resource.uri) for resource in resources} == {
            "crypto://supported-exchanges",
            "crypto://project-intro",
            "crypto://config-status",
        }


class TestToolCalls:
    """Test tools end to end with the exchange instance patched."""

    @pytest.mark.asyncio
    async def test_prices(self):
        exchange = make_exchange("okx")
        exchange.fetch_ticker.return_value = {"symbol": "BTC/USDT", "last": 42000, "timestamp": 1}

        with patch.object(exchange_client, "get_exchange", AsyncMock(return_value=exchange)) as get_exchange:
            result = await prices(symbol="btcusdt", exchange="okx")

        get_exchange.assert_awaited_once_with("okx", authenticated=False)
        assert json.loads(result) == {"symbol": "BTC/USDT", "price": 42000.0, "timestamp": 1}

    @pytest.mark.asyncio
    async def test_missing_credentials_become_tool_error(self):
        error = ExchangeNotConfiguredError("Exchange 'okx' has no API credentials configured.")

        with patch.object(exchange_client, "get_exchange", AsyncMock(side_effect=error)):
            with pytest.raises(ToolError, match="^Exchange 'okx' has no API credentials configured.$"):
                await balance(exchange="okx")

    @pytest.mark.asyncio
    async def test_exchange_failure_wrapped(self):
        exchange = make_exchange()
        exchange.fetch_ticker.side_effect = RuntimeError("binance GET failed")

        with patch.object(exchange_client, "get_exchange", AsyncMock(return_value=exchange)):
            with pytest.raises(ToolError, match="^Failed to get prices: binance GET failed$"):
                await prices(symbol="BTC/USDT")

    @pytest.mark.asyncio
    async def test_analyze_logs_missing_directory(self, tmp_path, monkeypatch):
        from crypto_mcp.settings import settings

        monkeypatch.setattr(settings, "log_dir", tmp_path / "missing")

        with pytest.raises(ToolError, match="Log directory not found"):
            await analyze_logs()


class TestMiddleware:
    """Test the decorators directly."""

    @pytest.mark.asyncio
    async def test_handle_errors_mapping(self):
        @handle_errors("do things")
        async def rejected():
            raise ValidationError("Quantity must be greater than 0")

        @handle_errors("do things")
        async def passthrough():
            raise ToolError("No data.")

        with pytest.raises(ToolError, match="^Quantity must be greater than 0$"):
            await rejected()
        with pytest.raises(ToolError, match="^No data.$"):
            await passthrough()

    @pytest.mark.asyncio
    async def test_with_exchange_injects_instance(self):
        exchange = make_exchange()

        @with_exchange(authenticated=True)
        async def tool(client, symbol: str):
            return client, symbol

        with patch.object(exchange_client, "get_exchange", AsyncMock(return_value=exchange)) as get_exchange:
            result = await tool("BTC/USDT", exchange="binance")

        get_exchange.assert_awaited_once_with("binance", authenticated=True)
        assert result == (exchange, "BTC/USDT")
        assert list(inspect.signature(tool).parameters) == ["symbol", "exchange"]


class TestResources:
    """Test resource contents."""

    def test_supported_exchanges(self):
        data = json.loads(supported_exchanges_text())

        assert "binance" in data["supported"]
        assert set(data) == {"configured", "default", "supported"}

    def test_project_intro(self):
        assert project_intro_text().startswith("# Crypto MCP Server")
