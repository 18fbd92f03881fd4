"""
Technical indicator calculations.

Every TA-Lib backed function drops the warm-up values, so the result only contains
defined points. Chaikin Money Flow is computed here directly and keeps the input
length, padding the warm-up with ``None``.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Sequence

import numpy as np
import talib

from crypto_mcp.exceptions import UnknownIndicatorError, ValidationError

logger = logging.getLogger("crypto-mcp.indicators")


@dataclass
class IndicatorInput:
    """Price series and parameters for an indicator calculation"""

    values: Sequence[float]
    period: int | None = None
    fast_period: int | None = None
    slow_period: int | None = None
    signal_period: int | None = None
    std_dev: float | None = None
    open: Sequence[float] | None = None
    high: Sequence[float] | None = None
    low: Sequence[float] | None = None
    close: Sequence[float] | None = None
    volume: Sequence[float] | None = None


def _array(series: Sequence[float]) -> np.ndarray:
    return np.asarray(series, dtype=np.float64)


def _require_period(input: IndicatorInput) -> int:
    if not input.period:
        raise ValidationError("Indicator requires a period")
    return int(input.period)


def _require_series(input: IndicatorInput, *names: str) -> list[np.ndarray]:
    """Fetch the named OHLCV series as float arrays of equal length"""
    missing = [name for name in names if getattr(input, name) is None]
    if missing:
        raise ValidationError(f"Indicator requires {', '.join(missing)} data")

    arrays = [_array(getattr(input, name)) for name in names]
    if len({len(array) for array in arrays}) > 1:
        raise ValidationError(f"Series {', '.join(names)} must have the same length")
    return arrays


def _defined(series: np.ndarray) -> list[float]:
    return [float(value) for value in series if not math.isnan(value)]


def _defined_rows(**columns: np.ndarray) -> list[dict[str, float]]:
    """Zip output columns, keeping only rows where every column is defined"""
    rows = []
    for values in zip(*columns.values()):
        if any(math.isnan(value) for value in values):
            continue
        rows.append({key: float(value) for key, value in zip(columns.keys(), values)})
    return rows


def calculate_ma(input: IndicatorInput) -> list[float]:
    """Simple moving average"""
    period = _require_period(input)
    values = _array(input.values)
    if len(values) < period:
        return []
    return _defined(talib.SMA(values, timeperiod=period))


def calculate_ema(input: IndicatorInput) -> list[float]:
    """Exponential moving average"""
    period = _require_period(input)
    values = _array(input.values)
    if len(values) < period:
        return []
    return _defined(talib.EMA(values, timeperiod=period))


def calculate_macd(input: IndicatorInput) -> list[dict[str, float]]:
    values = _array(input.values)
    fast_period = input.fast_period or 12
    slow_period = input.slow_period or 26
    signal_period = input.signal_period or 9
    if len(values) < slow_period + signal_period - 1:
        return []

    macd, signal, histogram = talib.MACD(
        values,
        fastperiod=fast_period,
        slowperiod=slow_period,
        signalperiod=signal_period,
    )
    return _defined_rows(MACD=macd, signal=signal, histogram=histogram)


def calculate_rsi(input: IndicatorInput) -> list[float]:
    period = _require_period(input)
    values = _array(input.values)
    if len(values) <= period:
        return []
    return _defined(talib.RSI(values, timeperiod=period))


def calculate_bollinger_bands(input: IndicatorInput) -> list[dict[str, float]]:
    period = _require_period(input)
    values = _array(input.values)
    std_dev = float(input.std_dev or 2)
    if len(values) < period:
        return []

    upper, middle, lower = talib.BBANDS(values, timeperiod=period, nbdevup=std_dev, nbdevdn=std_dev, matype=0)
    return _defined_rows(lower=lower, middle=middle, upper=upper)


def calculate_adx(input: IndicatorInput) -> list[dict[str, float]]:
    """Average directional index with the +DI/-DI lines (DMI)"""
    period = _require_period(input)
    high, low, close = _require_series(input, "high", "low", "close")
    if len(close) < 2 * period:
        return []

    adx = talib.ADX(high, low, close, timeperiod=period)
    pdi = talib.PLUS_DI(high, low, close, timeperiod=period)
    mdi = talib.MINUS_DI(high, low, close, timeperiod=period)
    return _defined_rows(adx=adx, pdi=pdi, mdi=mdi)


def calculate_stochastic(input: IndicatorInput) -> list[dict[str, float]]:
    """Stochastic oscillator: %K over ``period``, %D as an SMA of %K over ``signal_period``"""
    period = _require_period(input)
    high, low, close = _require_series(input, "high", "low", "close")
    signal_period = input.signal_period or 3
    if len(close) < period + signal_period - 1:
        return []

    k, d = talib.STOCHF(
        high,
        low,
        close,
        fastk_period=period,
        fastd_period=signal_period,
        fastd_matype=0,
    )
    return _defined_rows(k=k, d=d)


def calculate_kdj(input: IndicatorInput) -> list[dict[str, float]]:
    """KDJ: the stochastic oscillator plus J = 3K - 2D"""
    return [
        {"k": row["k"], "d": row["d"], "j": 3 * row["k"] - 2 * row["d"]}
        for row in calculate_stochastic(input)
    ]


def calculate_obv(input: IndicatorInput) -> list[float]:
    close, volume = _require_series(input, "close", "volume")
    if len(close) == 0:
        return []
    return _defined(talib.OBV(close, volume))


def calculate_atr(input: IndicatorInput) -> list[float]:
    period = _require_period(input)
    high, low, close = _require_series(input, "high", "low", "close")
    if len(close) <= period:
        return []
    return _defined(talib.ATR(high, low, close, timeperiod=period))


def calculate_mfi(input: IndicatorInput) -> list[float]:
    period = _require_period(input)
    high, low, close, volume = _require_series(input, "high", "low", "close", "volume")
    if len(close) <= period:
        return []
    return _defined(talib.MFI(high, low, close, volume, timeperiod=period))


def calculate_cmf(input: IndicatorInput) -> list[float | None]:
    """Chaikin Money Flow

    CMF = sum(MFM * volume, N) / sum(volume, N) with
    MFM = ((close - low) - (high - close)) / (high - low)
    """
    if input.high is None or input.low is None or input.close is None or input.volume is None or not input.period:
        return []

    high, low, close, volume = (list(map(float, series)) for series in (input.high, input.low, input.close, input.volume))
    period = int(input.period)

    result: list[float | None] = []
    for i in range(len(close)):
        if i < period - 1:
            result.append(None)
            continue

        sum_flow = 0.0
        sum_volume = 0.0
        for j in range(i - period + 1, i + 1):
            high_low = high[j] - low[j]
            multiplier = 0.0 if high_low == 0 else ((close[j] - low[j]) - (high[j] - close[j])) / high_low
            sum_flow += multiplier * volume[j]
            sum_volume += volume[j]

        result.append(0.0 if sum_volume == 0 else sum_flow / sum_volume)
    return result


def detect_volume_spike(volume: Sequence[float], period: int = 3) -> bool:
    """True when the latest volume exceeds twice the average of the previous ``period`` volumes"""
    if len(volume) <= period:
        return False
    previous = volume[-period - 1:-1]
    average = sum(previous) / period
    return float(volume[-1]) > 2 * average


def _volume_spike(input: IndicatorInput) -> bool:
    if input.volume is None:
        raise ValidationError("Indicator requires volume data")
    return detect_volume_spike(input.volume, input.period or 3)


def _fixed_ema(period: int) -> Callable[[IndicatorInput], list[float]]:
    def calculate(input: IndicatorInput) -> list[float]:
        return calculate_ema(replace(input, period=period))
    return calculate


INDICATORS: dict[str, Callable[[IndicatorInput], Any]] = {
    "ma": calculate_ma,
    "sma": calculate_ma,
    "ema": calculate_ema,
    "ema7": _fixed_ema(7),
    "ema30": _fixed_ema(30),
    "ema120": _fixed_ema(120),
    "macd": calculate_macd,
    "rsi": calculate_rsi,
    "bollingerbands": calculate_bollinger_bands,
    "bb": calculate_bollinger_bands,
    "adx": calculate_adx,
    "dmi": calculate_adx,
    "stochastic": calculate_stochastic,
    "kdj": calculate_kdj,
    "cmf": calculate_cmf,
    "obv": calculate_obv,
    "atr": calculate_atr,
    "mfi": calculate_mfi,
    "volumespike": _volume_spike,
}


def normalize_indicator_name(name: str) -> str:
    """Lower-case a name and drop spaces, underscores and hyphens ("Bollinger Bands" -> "bollingerbands")"""
    return "".join(char for char in name.lower() if char not in " _-")


def calculate_indicator(name: str, input: IndicatorInput) -> Any:
    """Run the indicator registered under ``name``"""
    key = normalize_indicator_name(name)
    calculate = INDICATORS.get(key)
    if calculate is None:
        raise UnknownIndicatorError(f"Unknown indicator type: {name}")

    logger.debug(f"Calculating {key} over {len(input.values)} values")
    return calculate(input)
