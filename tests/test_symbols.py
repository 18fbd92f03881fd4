"""
Unit tests for trading symbol normalization.
"""

import pytest

from conftest import make_exchange
from crypto_mcp.symbols import normalize_symbol, resolve_symbol, symbol_file_token


class TestNormalizeSymbol:
    """Test conversion of user symbols to the ccxt unified form."""

    @pytest.mark.parametrize(
        "raw",
        ["BTC/USDT", "btc/usdt", "BTC_USDT", "btc_usdt", "btc-usdt", "BTCUSDT", "btcusdt", "  BTC/USDT  "],
    )
    def test_common_spellings(self, raw):
        """Test every accepted spelling maps to BASE/QUOTE."""
        assert normalize_symbol(raw) == "BTC/USDT"

    def test_concatenated_prefers_longest_quote(self):
        """Test FDUSD wins over USD when splitting a concatenated pair."""
        assert normalize_symbol("BTCFDUSD") == "BTC/FDUSD"

    def test_concatenated_crypto_quote(self):
        """Test pairs quoted in BTC are split."""
        assert normalize_symbol("ethbtc") == "ETH/BTC"

    def test_known_base_preferred_over_longer_quote(self):
        """Test BNBUSD is not split into BN/BUSD."""
        assert normalize_symbol("BNBUSD") == "BNB/USD"
        assert normalize_symbol("bnbusdt") == "BNB/USDT"

    def test_unknown_base_keeps_longest_quote(self):
        """Test a base that is not a known asset falls back to the longest quote."""
        assert normalize_symbol("ARBUSD") == "AR/BUSD"

    def test_settle_suffix_preserved(self):
        """Test derivatives symbols keep their settle currency."""
        assert normalize_symbol("btc/usdt:usdt") == "BTC/USDT:USDT"
        assert normalize_symbol("BTCUSDT:USDT") == "BTC/USDT:USDT"

    def test_unrecognized_upper_cased(self):
        """Test unknown input is returned stripped and upper-cased."""
        assert normalize_symbol(" xyz ") == "XYZ"

    def test_bare_quote_asset_unchanged(self):
        """Test a quote asset alone is not split into an empty base."""
        assert normalize_symbol("USDT") == "USDT"

    def test_empty_returned_unchanged(self):
        """Test empty input passes through."""
        assert normalize_symbol("") == ""


class TestSymbolFileToken:
    """Test file-name safe symbol tokens."""

    def test_replaces_separators(self):
        assert symbol_file_token("BTC/USDT") == "BTC_USDT"
        assert symbol_file_token("BTC/USDT:USDT") == "BTC_USDT_USDT"


class TestResolveSymbol:
    """Test resolution of pairs against an exchange's market ids."""

    @pytest.mark.asyncio
    async def test_market_id_wins_over_suffix_split(self):
        exchange = make_exchange()
        exchange.markets_by_id = {"ARBUSD": [{"id": "ARBUSD", "symbol": "ARB/USD"}]}

        assert await resolve_symbol(exchange, "ARBUSD") == "ARB/USD"
        exchange.load_markets.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lower_case_id_and_single_market_entry(self):
        exchange = make_exchange()
        exchange.markets_by_id = {"ARBUSD": {"id": "ARBUSD", "symbol": "ARB/USD"}}

        assert await resolve_symbol(exchange, " arbusd ") == "ARB/USD"

    @pytest.mark.asyncio
    async def test_unlisted_id_falls_back_to_normalization(self):
        exchange = make_exchange()

        assert await resolve_symbol(exchange, "BNBUSD") == "BNB/USD"

    @pytest.mark.asyncio
    async def test_separated_symbol_skips_market_lookup(self):
        exchange = make_exchange()

        assert await resolve_symbol(exchange, "arb_usd") == "ARB/USD"
        assert await resolve_symbol(exchange, "BTCUSDT:USDT") == "BTC/USDT:USDT"
        exchange.load_markets.assert_not_awaited()
