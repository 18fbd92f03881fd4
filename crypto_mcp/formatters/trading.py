"""
Trading formatters for orders and trades.
"""
from typing import Any

from .base import format_number, format_timestamp
from .table_builder import ColumnDef, TableBuilder


def format_fee(fee: Any) -> str:
    """Render a ccxt fee structure as "<cost> <currency>" """
    if not isinstance(fee, dict) or fee.get("cost") is None:
        return ""
    return f"{format_number(fee['cost'])} {fee.get('currency') or ''}".strip()


ORDER_COLUMNS = [
    ColumnDef(name="Order ID", key="order_id"),
    ColumnDef(name="Symbol", key="symbol"),
    ColumnDef(name="Status", key="status"),
    ColumnDef(name="Type", key="type"),
    ColumnDef(name="Side", key="side"),
    ColumnDef(name="Price", key="price", formatter=format_number),
    ColumnDef(name="Amount", key="amount", formatter=format_number),
    ColumnDef(name="Filled", key="filled", formatter=format_number),
    ColumnDef(name="Remaining", key="remaining", formatter=format_number),
    ColumnDef(name="Timestamp", key="timestamp", formatter=format_timestamp),
]

TRADE_COLUMNS = [
    ColumnDef(name="Trade ID", key="id"),
    ColumnDef(name="Order ID", key="order_id"),
    ColumnDef(name="Symbol", key="symbol"),
    ColumnDef(name="Side", key="side"),
    ColumnDef(name="Price", key="price", formatter=format_number),
    ColumnDef(name="Amount", key="amount", formatter=format_number),
    ColumnDef(name="Cost", key="cost", formatter=format_number),
    ColumnDef(name="Fee", key="fee", formatter=format_fee),
    ColumnDef(name="Timestamp", key="timestamp", formatter=format_timestamp),
]


def format_orders_as_table(orders: list[dict[str, Any]]) -> str:
    """
    Format orders as a table.

    Columns: Order ID | Symbol | Status | Type | Side | Price | Amount | Filled | Remaining | Timestamp
    """
    return TableBuilder(ORDER_COLUMNS).build(orders)


def format_trades_as_table(trades: list[dict[str, Any]]) -> str:
    """
    Format account trades as a table.

    Columns: Trade ID | Order ID | Symbol | Side | Price | Amount | Cost | Fee | Timestamp
    """
    return TableBuilder(TRADE_COLUMNS).build(trades)
