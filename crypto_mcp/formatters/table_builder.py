"""
Markdown table rendering shared by every tool that answers with a table.

Tables are declared as a list of ``ColumnDef`` and rendered by ``TableBuilder`` into
a header row, a ``|---|`` separator row and one row per record.
"""
from dataclasses import dataclass
from typing import Any, Callable

from .base import escape_cell


@dataclass
class ColumnDef:
    """
    One column of a Markdown table.

    Attributes:
        name: Header text
        key: Record key to read, or several keys where the first present one wins
            (ccxt payloads are not uniform across exchanges)
        formatter: Turns the raw value into cell text
        default: Cell text when no key is present or the formatter rejects the value

    Examples:
        >>> ColumnDef(name="Order ID", key=["order_id", "id"])
        >>> ColumnDef(name="Price", key="price", formatter=format_number)
    """

    name: str
    key: str | list[str]
    formatter: Callable[[Any], str] | None = None
    default: str = ""

    @property
    def keys(self) -> list[str]:
        return [self.key] if isinstance(self.key, str) else list(self.key)

    def get_value(self, record: dict[str, Any]) -> Any:
        """Return the first non-null value among the column keys, else the default"""
        for key in self.keys:
            value = record.get(key)
            if value is not None:
                return value
        return self.default

    def format_cell(self, record: dict[str, Any]) -> str:
        value = self.get_value(record)
        if self.formatter:
            try:
                value = self.formatter(value)
            except (TypeError, ValueError):
                value = self.default

        return escape_cell(self.default if value is None else str(value))


class TableBuilder:
    """
    Renders records as a Markdown table.

    Example:
        >>> builder = TableBuilder([
        ...     ColumnDef(name="Asset", key="asset"),
        ...     ColumnDef(name="Total", key="total", formatter=format_number),
        ... ])
        >>> print(builder.build([{"asset": "BTC", "total": 0.5}]))
        | Asset | Total |
        |---|---|
        | BTC | 0.5 |
    """

    def __init__(self, columns: list[ColumnDef], empty_message: str = "No data."):
        self.columns = columns
        self.empty_message = empty_message

    @staticmethod
    def _line(cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"

    def build(self, data: list[dict[str, Any]], empty_message: str | None = None) -> str:
        """
        Render the records, or the empty message when there are none.

        Args:
            data: Records keyed by column key
            empty_message: Replaces the builder's empty message for this call
        """
        if not data:
            return empty_message or self.empty_message

        lines = [
            self._line([column.name for column in self.columns]),
            "|" + "---|" * len(self.columns),
        ]
        lines.extend(self._line([column.format_cell(record) for column in self.columns]) for record in data)
        return "\n".join(lines)

    def build_with_title(self, data: list[dict[str, Any]], title: str, empty_message: str | None = None) -> str:
        """Render the table under a bold title line"""
        return f"**{title}**\n\n{self.build(data, empty_message)}"
