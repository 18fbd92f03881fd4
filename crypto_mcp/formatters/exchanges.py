"""
Exchange configuration formatter.
"""
from typing import Any

from .table_builder import ColumnDef, TableBuilder

EXCHANGE_CONFIG_COLUMNS = [
    ColumnDef(name="Exchange ID", key="id"),
    ColumnDef(name="Name", key="name"),
    ColumnDef(name="Ready", key="ready", formatter=lambda ready: "✅" if ready is True else "❌"),
    ColumnDef(name="Error", key="error"),
]


def format_exchange_configs_as_table(results: list[dict[str, Any]]) -> str:
    """
    Format exchange readiness as a table.

    Columns: Exchange ID | Name | Ready | Error
    """
    return TableBuilder(EXCHANGE_CONFIG_COLUMNS, empty_message="No exchanges found.").build(results)
