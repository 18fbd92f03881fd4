"""
Market data operations business logic.

This module provides the core business logic for market data operations including
prices, best bid/ask quotes, order books, 24h statistics and candlesticks.
"""
import json
import logging
from datetime import datetime
from typing import Any

from crypto_mcp.exceptions import ToolError
from crypto_mcp.formatters import format_book_tickers_as_table, format_order_book_as_tables
from crypto_mcp.schemas import CandlestickOptions
from crypto_mcp.settings import settings
from crypto_mcp.symbols import resolve_symbol, symbol_file_token

logger = logging.getLogger("crypto-mcp.market-data")


def to_float(value: Any) -> float | None:
    """Convert an exchange value to float, keeping missing values as None"""
    if value is None or value == "":
        return None
    return float(value)


def _price_entry(ticker: dict[str, Any]) -> dict[str, Any]:
    return {
        "symbol": ticker.get("symbol"),
        "price": to_float(ticker.get("last")),
        "timestamp": ticker.get("timestamp"),
    }


async def get_prices(exchange: Any, symbol: str | None = None) -> dict[str, Any]:
    """
    Get the latest price for one symbol, or for every symbol of the exchange.

    Args:
        exchange: ccxt exchange instance
        symbol: Trading pair, all pairs when omitted

    Returns:
        Dictionary with the exchange id and a single price entry or a list of them
    """
    if symbol:
        ticker = await exchange.fetch_ticker(await resolve_symbol(exchange, symbol))
        prices: Any = _price_entry(ticker)
    else:
        tickers = await exchange.fetch_tickers()
        prices = [_price_entry(ticker) for ticker in tickers.values()]

    logger.info(f"Fetched prices on {exchange.id} for {symbol or 'all symbols'}")
    return {"exchange": exchange.id, "prices": prices}


def _top_of_book(symbol: str, bids: list, asks: list, timestamp: Any) -> dict[str, Any]:
    best_bid = bids[0] if bids else [0, 0]
    best_ask = asks[0] if asks else [0, 0]
    return {
        "symbol": symbol,
        "bid_price": best_bid[0] or 0,
        "bid_qty": best_bid[1] or 0,
        "ask_price": best_ask[0] or 0,
        "ask_qty": best_ask[1] or 0,
        "timestamp": timestamp,
    }


def _ticker_to_book(ticker: dict[str, Any]) -> dict[str, Any]:
    return {
        "symbol": ticker.get("symbol"),
        "bid_price": ticker.get("bid") or 0,
        "bid_qty": ticker.get("bidVolume") or 0,
        "ask_price": ticker.get("ask") or 0,
        "ask_qty": ticker.get("askVolume") or 0,
        "timestamp": ticker.get("timestamp"),
    }


async def get_book_tickers(exchange: Any, symbol: str | None = None) -> dict[str, Any]:
    """
    Get the best bid/ask for one symbol, or for every symbol.

    A single symbol is read from the top of its order book. Without a symbol, the
    exchange's bulk bid/ask endpoint is used when available and tickers otherwise.

    Returns:
        Dictionary containing the quotes and a formatted table
    """
    if symbol:
        normalized = await resolve_symbol(exchange, symbol)
        order_book = await exchange.fetch_order_book(normalized, 1)
        tickers = [
            _top_of_book(normalized, order_book.get("bids", []), order_book.get("asks", []), order_book.get("timestamp"))
        ]
    else:
        if exchange.has.get("fetchBidsAsks"):
            raw = await exchange.fetch_bids_asks()
        else:
            raw = await exchange.fetch_tickers()
        tickers = [_ticker_to_book(ticker) for ticker in raw.values()]

    if not tickers:
        raise ToolError("No data.")

    return {
        "exchange": exchange.id,
        "tickers": tickers,
        "tickers_table": format_book_tickers_as_table(tickers),
    }


async def get_depth(exchange: Any, symbol: str, limit: int | None = None) -> dict[str, Any]:
    """
    Get the order book for a symbol.

    Returns:
        Dictionary containing the order book and formatted bid/ask tables
    """
    normalized = await resolve_symbol(exchange, symbol)
    order_book = await exchange.fetch_order_book(normalized, limit)
    if not order_book or (not order_book.get("bids") and not order_book.get("asks")):
        raise ToolError("No data.")

    logger.info(f"Fetched order book for {normalized} on {exchange.id}")
    return {
        "exchange": exchange.id,
        "symbol": normalized,
        "bids": order_book.get("bids", []),
        "asks": order_book.get("asks", []),
        "timestamp": order_book.get("timestamp"),
        "tables": format_order_book_as_tables(order_book),
    }


def _day_stats(ticker: dict[str, Any]) -> dict[str, Any]:
    info = ticker.get("info") or {}
    return {
        "symbol": ticker.get("symbol"),
        "price_change": to_float(ticker.get("change")),
        "price_change_percent": to_float(ticker.get("percentage")),
        "weighted_avg_price": to_float(ticker.get("vwap") or ticker.get("average")),
        "prev_close_price": to_float(ticker.get("previousClose")),
        "last_price": to_float(ticker.get("last")),
        "last_qty": to_float(info.get("lastQty")) if isinstance(info, dict) else None,
        "bid_price": to_float(ticker.get("bid")),
        "ask_price": to_float(ticker.get("ask")),
        "open_price": to_float(ticker.get("open")),
        "high_price": to_float(ticker.get("high")),
        "low_price": to_float(ticker.get("low")),
        "volume": to_float(ticker.get("baseVolume")),
        "quote_volume": to_float(ticker.get("quoteVolume")),
        "open_time": info.get("openTime") if isinstance(info, dict) else None,
        "close_time": info.get("closeTime") if isinstance(info, dict) else None,
    }


async def get_prev_day(exchange: Any, symbol: str | bool | None = None) -> dict[str, Any]:
    """
    Get 24h statistics for one symbol, or for every symbol when ``symbol`` is falsy.

    Returns:
        Dictionary with one statistics entry or a list of them
    """
    if symbol and isinstance(symbol, str):
        ticker = await exchange.fetch_ticker(await resolve_symbol(exchange, symbol))
        stats: Any = _day_stats(ticker)
    else:
        tickers = await exchange.fetch_tickers()
        stats = [_day_stats(ticker) for ticker in tickers.values()]

    return {"exchange": exchange.id, "stats": stats}


def _candle_row(candle: list[Any], symbol: str, interval: str, exchange_id: str) -> dict[str, Any]:
    def extra(index: int) -> Any:
        return candle[index] if len(candle) > index and candle[index] is not None else 0

    return {
        "open_time": candle[0],
        "open": to_float(candle[1]),
        "high": to_float(candle[2]),
        "low": to_float(candle[3]),
        "close": to_float(candle[4]),
        "volume": to_float(candle[5]),
        "close_time": extra(6),
        "quote_asset_volume": extra(7),
        "number_of_trades": extra(8),
        "taker_buy_base_asset_volume": extra(9),
        "taker_buy_quote_asset_volume": extra(10),
        "symbol": symbol,
        "interval": interval,
        "exchange": exchange_id,
    }


def save_candles(candles: list[dict[str, Any]], symbol: str, exchange_id: str) -> str | None:
    """Write a candle snapshot next to the logs, returning the file path

    Failures are logged and never propagate, a snapshot is only a convenience copy.
    """
    if not settings.save_candles:
        return None

    file_name = f"{datetime.now().strftime('%Y-%m-%d_%H%M%S')}_{symbol_file_token(symbol)}_{exchange_id}.json"
    file_path = settings.log_dir / file_name
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_path.write_text(json.dumps(candles, indent=2), encoding="utf-8")
        logger.debug(f"Wrote candlestick data to {file_path}")
    except OSError as e:
        logger.error(f"Failed to write candlestick data to {file_path}: {e}")
        return None
    return str(file_path)


async def get_candlesticks(
    exchange: Any,
    symbol: str,
    interval: str,
    options: CandlestickOptions | None = None,
) -> list[dict[str, Any]]:
    """
    Get OHLCV candles for a symbol.

    Args:
        exchange: ccxt exchange instance
        symbol: Trading pair
        interval: Candle interval (e.g., '1m', '1h', '1d')
        options: ``since``/``limit``/``params`` forwarded to ``fetch_ohlcv``

    Returns:
        Candle rows, oldest first

    Raises:
        ToolError: If the exchange returned no candles
    """
    options = options or CandlestickOptions()
    normalized = await resolve_symbol(exchange, symbol)
    ohlcv = await exchange.fetch_ohlcv(normalized, interval, options.since, options.limit, options.params)
    if not ohlcv:
        logger.error(f"No candlestick data returned for {normalized} {interval} on {exchange.id}")
        raise ToolError("No candlestick data available.")

    logger.info(f"Fetched {len(ohlcv)} candlesticks for {normalized} {interval} on {exchange.id}")
    candles = [_candle_row(candle, normalized, interval, exchange.id) for candle in ohlcv]
    save_candles(candles, normalized, exchange.id)
    return candles
