"""
Shared fixtures: ccxt exchange doubles and synthetic candles.
"""

import math
from unittest.mock import AsyncMock, MagicMock

import pytest


def make_exchange(exchange_id: str = "binance", has: dict | None = None) -> MagicMock:
    """Build a ccxt-like async exchange double"""
    exchange = MagicMock()
    exchange.id = exchange_id
    exchange.has = has or {}
    exchange.markets_by_id = {}
    for method in (
        "load_markets",
        "fetch_ticker",
        "fetch_tickers",
        "fetch_order_book",
        "fetch_bids_asks",
        "fetch_ohlcv",
        "fetch_balance",
        "fetch_funding_rate",
        "create_order",
        "fetch_order",
        "fetch_orders",
        "fetch_open_orders",
        "cancel_order",
        "cancel_all_orders",
        "fetch_my_trades",
        "sapi_get_asset_dribblet",
        "close",
    ):
        setattr(exchange, method, AsyncMock())
    return exchange


@pytest.fixture
def exchange():
    return make_exchange()


def synthetic_ohlcv(count: int = 60, start: int = 1704067200000, step: int = 3600000) -> list[list[float]]:
    """Deterministic wavy uptrend in ccxt OHLCV layout"""
    rows = []
    for i in range(count):
        close = 100 + 10 * math.sin(i / 5) + i * 0.5
        rows.append([start + i * step, close - 0.5, close + 2, close - 2, close, 1000 + (i % 7) * 100])
    return rows


@pytest.fixture
def ohlcv():
    return synthetic_ohlcv()


@pytest.fixture
def no_candle_snapshots(monkeypatch):
    from crypto_mcp.settings import settings

    monkeypatch.setattr(settings, "save_candles", False)
