"""
Market analysis prompts - technical analysis workflows built on candlesticks and indicators.
"""
from .base import exchange_hint, logger


def market_analysis_text(symbol: str, exchange: str | None = None) -> str:
    return f"""Please analyze the market situation of {symbol} using a multi-indicator technical analysis framework.

{exchange_hint(exchange)}

**Analysis Process:**
1. Use the "candlesticks" tool to obtain price data for {symbol} (for example on the 4h and 1d intervals).
2. Use the "calculateIndicators" tool to compute EMA, MACD, RSI, Bollinger Bands, KDJ, ATR and CMF.
3. Evaluate each dimension separately:
   - **Trend**: EMA alignment and slope, price position relative to the moving averages
   - **Momentum**: MACD crossovers and histogram, RSI levels and divergences, KDJ
   - **Volume**: CMF sign, OBV direction, volume spikes confirming or rejecting moves
   - **Volatility**: Bollinger Band width and ATR to size stops
4. Look for resonance: a signal is only strong when several independent indicators agree.
5. Provide a comprehensive analysis with potential entry, stop-loss and take-profit levels, and state the risk control rules the plan relies on."""


def support_resistance_text(symbol: str, interval: str, exchange: str | None = None) -> str:
    return f"""Please analyze the support and resistance levels for {symbol} on the {interval} timeframe.

{exchange_hint(exchange)}

1. First use the "candlesticks" tool to get candlestick data
2. Determine major support and resistance areas based on price history
3. Check if price is currently near these levels
4. Consider how indicators like RSI confirm these levels (use the "calculateIndicators" tool)
5. Suggest potential trading strategies based on these levels"""


def indicator_analysis_text(symbol: str, interval: str, indicator: str, exchange: str | None = None) -> str:
    return f"""Please perform a detailed analysis of {symbol} on the {interval} timeframe using the {indicator} indicator.

{exchange_hint(exchange)}

1. Use the "candlesticks" tool to get price data
2. Use the "calculateIndicators" tool with indicators=["{indicator}"] to calculate the indicator
3. Interpret the current indicator readings
4. Identify any signals or patterns
5. Place the indicator in the broader market context
6. Suggest potential trading actions based on this analysis"""


def multi_timeframe_text(symbol: str, exchange: str | None = None) -> str:
    return f"""Please perform a multi-timeframe analysis for {symbol} across different timeframes.

{exchange_hint(exchange)}

1. Analyze the long-term trend using the 1d timeframe with the "candlesticks" and "calculateIndicators" tools
2. Analyze the medium-term trend using the 4h timeframe
3. Analyze the short-term trend using the 1h timeframe
4. Identify confluence between timeframes (where multiple timeframes suggest the same direction)
5. Check for divergence between price action and indicators like RSI or MACD
6. Propose a trading strategy that aligns with trends across multiple timeframes"""


def register_market_analysis_prompts(mcp):
    """Register technical analysis prompts."""

    @mcp.prompt(name="marketAnalysis")
    def market_analysis(symbol: str, exchange: str | None = None) -> str:
        """Analyze a trading pair with trend, momentum, volume and volatility indicators.

        Args:
            symbol: Trading pair symbol, e.g., BTC/USDT, ETH/USDT
            exchange: Exchange id, e.g., binance, okx, gate
        """
        logger.debug(f"Prompt marketAnalysis - Input parameters: symbol={symbol}, exchange={exchange}")
        return market_analysis_text(symbol, exchange)

    @mcp.prompt(name="supportResistanceAnalysis")
    def support_resistance_analysis(symbol: str, interval: str, exchange: str | None = None) -> str:
        """Find support and resistance levels for a trading pair.

        Args:
            symbol: Trading pair symbol, e.g., BTC/USDT, ETH/USDT
            interval: Candlestick interval, e.g., 4h, 1d
            exchange: Exchange id, e.g., binance, okx, gate
        """
        logger.debug(
            f"Prompt supportResistanceAnalysis - Input parameters: symbol={symbol}, interval={interval}, exchange={exchange}"
        )
        return support_resistance_text(symbol, interval, exchange)

    @mcp.prompt(name="indicatorAnalysis")
    def indicator_analysis(symbol: str, interval: str, indicator: str, exchange: str | None = None) -> str:
        """Analyze a trading pair with a single indicator.

        Args:
            symbol: Trading pair symbol, e.g., BTC/USDT, ETH/USDT
            interval: Candlestick interval, e.g., 1h, 4h, 1d
            indicator: Indicator to analyze (e.g., rsi, macd, bb)
            exchange: Exchange id, e.g., binance, okx, gate
        """
        logger.debug(
            f"Prompt indicatorAnalysis - Input parameters: symbol={symbol}, interval={interval}, "
            f"indicator={indicator}, exchange={exchange}"
        )
        return indicator_analysis_text(symbol, interval, indicator, exchange)

    @mcp.prompt(name="multiTimeframeAnalysis")
    def multi_timeframe_analysis(symbol: str, exchange: str | None = None) -> str:
        """Analyze a trading pair on the 1d, 4h and 1h timeframes.

        Args:
            symbol: Trading pair symbol, e.g., BTC/USDT, ETH/USDT
            exchange: Exchange id, e.g., binance, okx, gate
        """
        logger.debug(f"Prompt multiTimeframeAnalysis - Input parameters: symbol={symbol}, exchange={exchange}")
        return multi_timeframe_text(symbol, exchange)
