"""
Technical indicator tools business logic.

This module fetches candlesticks and runs the requested indicators over them.
"""
import logging
from typing import Any

from crypto_mcp.indicators import IndicatorInput, calculate_indicator, normalize_indicator_name
from crypto_mcp.schemas import DEFAULT_INDICATORS, CandlestickOptions, IndicatorParameters
from crypto_mcp.symbols import resolve_symbol
from crypto_mcp.tools.market_data import get_candlesticks

logger = logging.getLogger("crypto-mcp.indicators")


def build_indicator_input(candles: list[dict[str, Any]], parameters: IndicatorParameters) -> IndicatorInput:
    """Turn candle rows into indicator series, using close prices as the main values"""
    closes = [candle["close"] for candle in candles]
    return IndicatorInput(
        values=closes,
        open=[candle["open"] for candle in candles],
        high=[candle["high"] for candle in candles],
        low=[candle["low"] for candle in candles],
        close=closes,
        volume=[candle["volume"] for candle in candles],
        period=parameters.period,
        fast_period=parameters.fast_period,
        slow_period=parameters.slow_period,
        signal_period=parameters.signal_period,
        std_dev=parameters.std_dev,
    )


async def get_funding_rate(exchange: Any, symbol: str) -> dict[str, Any] | None:
    """Current funding rate of a perpetual market, None when the exchange has no such endpoint"""
    if not exchange.has.get("fetchFundingRate"):
        return None

    funding = await exchange.fetch_funding_rate(await resolve_symbol(exchange, symbol))
    return {
        "funding_rate": funding.get("fundingRate"),
        "mark_price": funding.get("markPrice"),
        "index_price": funding.get("indexPrice"),
        "next_funding_time": funding.get("nextFundingTimestamp") or funding.get("fundingTimestamp"),
    }


async def calculate_indicators(
    exchange: Any,
    symbol: str,
    interval: str,
    indicators: list[str] | None = None,
    parameters: IndicatorParameters | None = None,
    options: CandlestickOptions | None = None,
) -> dict[str, Any]:
    """
    Calculate indicators over the candles of a symbol.

    A failing indicator is logged and reported as None so the others still come back.

    Returns:
        Mapping of requested indicator name to its result
    """
    if indicators is None:
        indicators = list(DEFAULT_INDICATORS)
    parameters = parameters or IndicatorParameters()

    candles = await get_candlesticks(exchange, symbol, interval, options)
    indicator_input = build_indicator_input(candles, parameters)
    logger.debug(
        f"calculateIndicators on {len(candles)} candles for {symbol} {interval}: "
        f"indicators={indicators}, parameters={parameters.model_dump()}"
    )

    results: dict[str, Any] = {}
    for name in indicators:
        try:
            if normalize_indicator_name(name) == "fundingrate":
                results[name] = await get_funding_rate(exchange, symbol)
            else:
                results[name] = calculate_indicator(name, indicator_input)
        except Exception as e:
            logger.error(f"Error calculating indicator {name}: {e}")
            results[name] = None

    return results
