"""
Trading symbol normalization

Users type pairs as ``BTC/USDT``, ``btc_usdt``, ``BTC-USDT`` or ``BTCUSDT``; ccxt expects
the unified ``BASE/QUOTE`` form (optionally ``BASE/QUOTE:SETTLE`` for derivatives).
"""

import re
from typing import Any

# Checked longest first so that e.g. FDUSD wins over USD
QUOTE_ASSETS = sorted(
    [
        "USDT", "USDC", "BUSD", "FDUSD", "TUSD", "USDP", "DAI", "UST", "USD",
        "BTC", "ETH", "BNB", "SOL", "XRP", "TRX", "DOGE",
        "EUR", "GBP", "TRY", "BRL", "AUD", "JPY", "RUB", "UAH", "ZAR", "IDR", "KRW",
    ],
    key=len,
    reverse=True,
)

SEPARATORS = re.compile(r"[/_\-]")


def _split_concatenated(symbol: str) -> tuple[str, str] | None:
    """Split on a known quote suffix, preferring a split whose base is itself a known asset

    ``BNBUSD`` ends with both BUSD and USD; only ``BNB/USD`` leaves a known base.
    """
    splits = [
        (symbol[: -len(quote)], quote)
        for quote in QUOTE_ASSETS
        if symbol.endswith(quote) and len(symbol) > len(quote)
    ]
    for base, quote in splits:
        if base in QUOTE_ASSETS:
            return base, quote
    return splits[0] if splits else None


def normalize_symbol(symbol: str) -> str:
    """Convert a user supplied trading pair into the ccxt unified symbol"""
    if not symbol:
        return symbol

    symbol = symbol.strip().upper()
    pair, _, settle = symbol.partition(":")

    parts = [part for part in SEPARATORS.split(pair) if part]
    if len(parts) == 2:
        base, quote = parts
    elif len(parts) == 1:
        split = _split_concatenated(parts[0])
        if split is None:
            return symbol
        base, quote = split
    else:
        return symbol

    normalized = f"{base}/{quote}"
    if settle:
        normalized = f"{normalized}:{settle}"
    return normalized


def symbol_file_token(symbol: str) -> str:
    """Make a symbol safe to embed in a file name"""
    return re.sub(r"[/_:]", "_", symbol)


def _market_symbol(markets_by_id: dict[str, Any], market_id: str) -> str | None:
    # ccxt 4 maps an id to a list of markets (spot and derivatives can share one)
    for key in (market_id, market_id.upper(), market_id.lower()):
        markets = markets_by_id.get(key)
        if isinstance(markets, dict):
            markets = [markets]
        if markets:
            return markets[0]["symbol"]
    return None


async def resolve_symbol(exchange: Any, symbol: str) -> str:
    """Resolve a user supplied pair against the markets of an exchange

    Concatenated input such as ``ARBUSD`` is looked up among the exchange's own market
    ids first, since no suffix rule can tell ``ARB/USD`` from ``AR/BUSD``. Everything
    else, and ids the exchange does not list, goes through ``normalize_symbol``.
    """
    raw = symbol.strip() if symbol else symbol
    if raw and ":" not in raw and not SEPARATORS.search(raw):
        await exchange.load_markets()
        resolved = _market_symbol(exchange.markets_by_id or {}, raw)
        if resolved:
            return resolved
    return normalize_symbol(symbol)
