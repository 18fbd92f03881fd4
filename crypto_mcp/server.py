"""
Main MCP server for crypto exchange market data, trading and technical indicators
"""

import asyncio
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from crypto_mcp.config_validation import get_configuration_report
from crypto_mcp.exchange_client import exchange_client
from crypto_mcp.formatters import format_exchange_configs_as_table, to_json
from crypto_mcp.logging import setup_logging
from crypto_mcp.middleware import handle_errors, tool_handler
from crypto_mcp.prompts import register_all_prompts
from crypto_mcp.resources import register_resources
from crypto_mcp.schemas import CandlestickOptions, IndicatorParameters, LogQuery, OrderOptions
from crypto_mcp.settings import settings
from crypto_mcp.tools import account, logs, market_data, trading
from crypto_mcp.tools import indicators as indicator_tools

logger = logging.getLogger("crypto-mcp")

# Initialize FastMCP server
mcp = FastMCP(
    "crypto-mcp-server",
    instructions=(
        "Crypto exchange market data, account, trading and technical indicator tools backed by ccxt. "
        "Every tool accepts an optional 'exchange' (a ccxt exchange id such as binance, okx or gate). "
        "Market data works without API keys, account and order tools need credentials."
    ),
)


# Market Data Tools


@mcp.tool(name="prices")
@tool_handler("get prices")
async def prices(client: Any, symbol: str | None = None) -> str:
    """Get the latest price for a symbol, or for all symbols of the exchange when omitted.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await market_data.get_prices(client, symbol)
    return to_json(result["prices"])


@mcp.tool(name="bookTickers")
@tool_handler("get book tickers")
async def book_tickers(client: Any, symbol: str | None = None) -> str:
    """Get the best bid/ask price and quantity for a symbol, or for all symbols when omitted.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await market_data.get_book_tickers(client, symbol)
    return result["tickers_table"]


@mcp.tool(name="depth")
@tool_handler("get order book")
async def depth(client: Any, symbol: str, limit: int | None = None) -> str:
    """Get the order book (market depth) for a symbol. Shows the top 10 bid and ask levels.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        limit: Number of levels requested from the exchange
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await market_data.get_depth(client, symbol, limit)
    return result["tables"]


@mcp.tool(name="prevDay")
@tool_handler("get 24h statistics")
async def prev_day(client: Any, symbol: str | bool | None = None) -> str:
    """Get 24 hour price change statistics for a symbol, or for all symbols when omitted or false.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await market_data.get_prev_day(client, symbol)
    return to_json(result["stats"])


@mcp.tool(name="candlesticks")
@tool_handler("get candlesticks")
async def candlesticks(client: Any, symbol: str, interval: str, options: CandlestickOptions | None = None) -> str:
    """Get candlestick (OHLCV) data for a symbol.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        interval: Candlestick interval, e.g., 1m, 5m, 1h, 1d
        options: Optional since (ms), limit and exchange-specific params for the request
        exchange: Exchange id, e.g., binance, okx, gate
    """
    candles = await market_data.get_candlesticks(client, symbol, interval, options)
    return to_json(candles)


# Account Tools


@mcp.tool(name="balance")
@tool_handler("get balance", authenticated=True)
async def balance(client: Any) -> str:
    """Get the account balance. Only assets with a non-zero total are listed. Requires API credentials.

    Args:
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await account.get_balance(client)
    return result["balances_table"]


@mcp.tool(name="dustLog")
@tool_handler("get dust log", authenticated=True)
async def dust_log(client: Any) -> str:
    """Get the small-balance (dust) conversion history. Binance only, requires API credentials.

    Args:
        exchange: Exchange id, must be binance
    """
    entries = await account.get_dust_log(client)
    return to_json(entries)


# Order Tools


@mcp.tool(name="buy")
@tool_handler("place buy order", authenticated=True)
async def buy(
    client: Any, symbol: str, quantity: float, price: float, options: OrderOptions | None = None
) -> str:
    """Place a buy order, a limit order unless options.type says otherwise. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        quantity: Order quantity in base asset
        price: Limit price
        options: Order type (limit, market, STOP_LOSS, STOP_LOSS_LIMIT, TAKE_PROFIT, TAKE_PROFIT_LIMIT) and iceberg_qty
        exchange: Exchange id, e.g., binance, okx, gate
    """
    order = await trading.place_order(client, "buy", symbol, quantity, price, options)
    return to_json(order)


@mcp.tool(name="sell")
@tool_handler("place sell order", authenticated=True)
async def sell(
    client: Any, symbol: str, quantity: float, price: float, options: OrderOptions | None = None
) -> str:
    """Place a sell order, a limit order unless options.type says otherwise. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        quantity: Order quantity in base asset
        price: Limit price
        options: Order type (limit, market, STOP_LOSS, STOP_LOSS_LIMIT, TAKE_PROFIT, TAKE_PROFIT_LIMIT) and iceberg_qty
        exchange: Exchange id, e.g., binance, okx, gate
    """
    order = await trading.place_order(client, "sell", symbol, quantity, price, options)
    return to_json(order)


@mcp.tool(name="marketBuy")
@tool_handler("place market buy order", authenticated=True)
async def market_buy(client: Any, symbol: str, quantity: float, options: dict[str, Any] | None = None) -> str:
    """Place a market buy order. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        quantity: Order quantity in base asset
        options: Extra exchange-specific order parameters
        exchange: Exchange id, e.g., binance, okx, gate
    """
    order = await trading.place_market_order(client, "buy", symbol, quantity, options)
    return to_json(order)


@mcp.tool(name="marketSell")
@tool_handler("place market sell order", authenticated=True)
async def market_sell(client: Any, symbol: str, quantity: float, options: dict[str, Any] | None = None) -> str:
    """Place a market sell order. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        quantity: Order quantity in base asset
        options: Extra exchange-specific order parameters
        exchange: Exchange id, e.g., binance, okx, gate
    """
    order = await trading.place_market_order(client, "sell", symbol, quantity, options)
    return to_json(order)


@mcp.tool(name="orderStatus")
@tool_handler("get order status", authenticated=True)
async def order_status(client: Any, symbol: str, order_id: str) -> str:
    """Get the status of an order. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        order_id: Exchange order id
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await trading.get_order_status(client, symbol, order_id)
    return result["orders_table"]


@mcp.tool(name="allOrders")
@tool_handler("get all orders", authenticated=True)
async def all_orders(client: Any, symbol: str) -> str:
    """Get all orders (open, cancelled and filled) for a symbol. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await trading.get_all_orders(client, symbol)
    return result["orders_table"]


@mcp.tool(name="openOrders")
@tool_handler("get open orders", authenticated=True)
async def open_orders(client: Any, symbol: str | None = None) -> str:
    """Get open orders for a symbol, or for all symbols when omitted. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await trading.get_open_orders(client, symbol)
    return result["orders_table"]


@mcp.tool(name="cancel")
@tool_handler("cancel order", authenticated=True)
async def cancel(client: Any, symbol: str, order_id: str) -> str:
    """Cancel an order. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        order_id: Exchange order id
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await trading.cancel_order(client, symbol, order_id)
    return to_json(result)


@mcp.tool(name="cancelAll")
@tool_handler("cancel all orders", authenticated=True)
async def cancel_all(client: Any, symbol: str) -> str:
    """Cancel all open orders for a symbol. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        exchange: Exchange id, e.g., binance, okx, gate
    """
    results = await trading.cancel_all_orders(client, symbol)
    return to_json(results)


@mcp.tool(name="trades")
@tool_handler("get trades", authenticated=True)
async def trades(client: Any, symbol: str) -> str:
    """Get the account's trade history for a symbol. Requires API credentials.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        exchange: Exchange id, e.g., binance, okx, gate
    """
    result = await trading.get_trades(client, symbol)
    return result["trades_table"]


# Diagnostics Tools


@mcp.tool(name="checkExchangeConfigs")
@handle_errors("check exchange configs")
async def check_exchange_configs() -> str:
    """Check every supported exchange for API key/secret configuration."""
    results = exchange_client.check_exchange_configs()
    return format_exchange_configs_as_table(results)


@mcp.tool(name="analyzeLogs")
@handle_errors("analyze logs")
async def analyze_logs(
    date: str = "today", search: str | None = None, level: str | None = None, tail: int | None = None
) -> str:
    """Read the server log file of a day, optionally filtered.

    Args:
        date: Log date: YYYY-MM-DD, "today", or "yesterday"
        search: Case-insensitive text that log entries must contain
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        tail: Only return the last N matching entries
    """
    query = LogQuery(date=date, search=search, level=level, tail=tail)
    result = logs.analyze_logs(query, settings.log_dir)
    return result["content"]


# Indicator Tools


@mcp.tool(name="calculateIndicators")
@tool_handler("calculate indicators")
async def calculate_indicators(
    client: Any,
    symbol: str,
    interval: str,
    options: CandlestickOptions | None = None,
    indicators: list[str] | None = None,
    period: int = 14,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    std_dev: float = 2,
) -> str:
    """Fetch candlesticks and calculate technical indicators over them.

    Supported indicators: ma/sma, ema, ema7, ema30, ema120, macd, rsi, bollinger bands/bb, adx/dmi,
    stochastic, kdj, cmf, obv, atr, mfi, volume spike, funding rate.

    Args:
        symbol: Trading pair symbol, e.g., ETH/USDT, BTC/USDT
        interval: Candlestick interval, e.g., 1m, 5m, 1h, 1d
        options: Optional since (ms), limit and exchange-specific params for the candle request
        indicators: Indicators to calculate (default: macd, rsi, bollinger bands, kdj, ema, atr, cmf)
        period: Default period for indicators
        fast_period: Fast period for MACD
        slow_period: Slow period for MACD
        signal_period: Signal period for MACD and Stochastic
        std_dev: Standard deviation for Bollinger Bands
        exchange: Exchange id, e.g., binance, okx, gate
    """
    parameters = IndicatorParameters(
        period=period,
        fast_period=fast_period,
        slow_period=slow_period,
        signal_period=signal_period,
        std_dev=std_dev,
    )
    results = await indicator_tools.calculate_indicators(client, symbol, interval, indicators, parameters, options)
    return to_json(results)


register_all_prompts(mcp)
register_resources(mcp)


async def main():
    """Run the MCP server"""
    setup_logging(settings.log_level, settings.log_dir, settings.log_retention_days)
    logger.info("Starting Crypto MCP Server")
    logger.info(f"Default exchange: {settings.default_exchange}")
    logger.info(f"Log directory: {settings.log_dir}")
    logger.info(f"\n{get_configuration_report()}")
    logger.info(f"Supported exchanges: {len(exchange_client.supported_exchanges())}")
    logger.info(f"Configured exchanges: {exchange_client.available_exchanges() or 'none'}")

    # Exchange instances are created lazily on first tool use
    try:
        await mcp.run_stdio_async()
    finally:
        await exchange_client.close()


def run():
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
