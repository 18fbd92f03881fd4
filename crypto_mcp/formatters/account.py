"""
Account formatters for balances.
"""
from typing import Any

from .base import format_number
from .table_builder import ColumnDef, TableBuilder

BALANCE_COLUMNS = [
    ColumnDef(name="Asset", key="asset"),
    ColumnDef(name="Free", key="free", formatter=format_number),
    ColumnDef(name="Used", key="used", formatter=format_number),
    ColumnDef(name="Total", key="total", formatter=format_number),
]


def format_balances_as_table(balances: list[dict[str, Any]]) -> str:
    """
    Format non-zero balances as a table.

    Columns: Asset | Free | Used | Total
    """
    return TableBuilder(BALANCE_COLUMNS).build(balances)
