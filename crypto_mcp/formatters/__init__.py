"""
Formatters package for the Crypto MCP server.

This package provides Markdown table formatters for market data, balances,
orders, trades and exchange configuration.
"""

# Export all formatters for easy importing
from .account import format_balances_as_table
from .base import format_number, format_timestamp, to_json
from .exchanges import format_exchange_configs_as_table
from .market_data import format_book_tickers_as_table, format_order_book_as_tables
from .trading import format_orders_as_table, format_trades_as_table

__all__ = [
    # Market data formatters
    "format_book_tickers_as_table",
    "format_order_book_as_tables",
    # Account formatters
    "format_balances_as_table",
    # Trading formatters
    "format_orders_as_table",
    "format_trades_as_table",
    # Diagnostics
    "format_exchange_configs_as_table",
    # Helpers
    "format_number",
    "format_timestamp",
    "to_json",
]
