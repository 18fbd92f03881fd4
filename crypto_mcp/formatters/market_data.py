"""
Market data formatters for book tickers and order books.
"""
from typing import Any

from .base import format_number, format_timestamp
from .table_builder import ColumnDef, TableBuilder

BOOK_TICKER_COLUMNS = [
    ColumnDef(name="Symbol", key="symbol"),
    ColumnDef(name="Bid Price", key="bid_price", formatter=format_number),
    ColumnDef(name="Bid Qty", key="bid_qty", formatter=format_number),
    ColumnDef(name="Ask Price", key="ask_price", formatter=format_number),
    ColumnDef(name="Ask Qty", key="ask_qty", formatter=format_number),
    ColumnDef(name="Timestamp", key="timestamp", formatter=format_timestamp),
]

ORDER_BOOK_COLUMNS = [
    ColumnDef(name="Price", key="price", formatter=format_number),
    ColumnDef(name="Quantity", key="quantity", formatter=format_number),
]

ORDER_BOOK_LEVELS = 10


def format_book_tickers_as_table(tickers: list[dict[str, Any]]) -> str:
    """
    Format best bid/ask quotes as a table.

    Columns: Symbol | Bid Price | Bid Qty | Ask Price | Ask Qty | Timestamp
    """
    return TableBuilder(BOOK_TICKER_COLUMNS).build(tickers)


def _levels(side: list[list[float]], depth: int) -> list[dict[str, Any]]:
    return [{"price": level[0], "quantity": level[1]} for level in side[:depth]]


def format_order_book_as_tables(order_book: dict[str, Any], depth: int = ORDER_BOOK_LEVELS) -> str:
    """
    Format an order book as separate bid and ask tables.

    Args:
        order_book: Order book with ``bids`` and ``asks`` as [price, quantity] levels
        depth: Number of levels to show per side

    Returns:
        Bids table followed by the asks table
    """
    builder = TableBuilder(ORDER_BOOK_COLUMNS, empty_message="No orders.")
    bids = builder.build_with_title(_levels(order_book.get("bids", []), depth), "Bids")
    asks = builder.build_with_title(_levels(order_book.get("asks", []), depth), "Asks")
    return f"{bids}\n\n{asks}"
