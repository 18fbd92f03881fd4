"""
Base formatting utilities shared across all formatters.

This module provides common formatting functions for numbers, timestamps
and JSON payloads used throughout the application.
"""
import json
import math
from datetime import datetime, timezone
from typing import Any


def to_json(data: Any) -> str:
    """
    Serialize a tool result as indented JSON.

    Values JSON does not know (datetimes, Decimals) are rendered with ``str``.
    """
    return json.dumps(data, indent=2, default=str, ensure_ascii=False)


def format_number(num: Any, max_decimals: int = 8) -> str:
    """
    Format a number without scientific notation or trailing zeros.

    Args:
        num: The number to format
        max_decimals: Maximum number of decimal places (default: 8)

    Returns:
        Formatted number string, empty for missing values

    Examples:
        >>> format_number(0.00001)
        '0.00001'
        >>> format_number(42.5)
        '42.5'
        >>> format_number(None)
        ''
    """
    if num is None:
        return ""

    try:
        num_float = float(num)
    except (ValueError, TypeError):
        return str(num)

    if math.isnan(num_float):
        return ""
    if num_float.is_integer():
        return str(int(num_float))
    return f"{num_float:.{max_decimals}f}".rstrip("0").rstrip(".")


def format_timestamp(ts: Any, format_str: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Format a millisecond timestamp as a UTC datetime string.

    Args:
        ts: Unix timestamp in milliseconds (seconds are accepted as well)
        format_str: strftime format string

    Returns:
        Formatted datetime string, empty for missing values

    Examples:
        >>> format_timestamp(1704067200000)
        '2024-01-01 00:00:00'
    """
    if ts is None or ts == "":
        return ""

    try:
        ts_float = float(ts)
        timestamp = ts_float / 1000 if ts_float > 1e11 else ts_float
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(format_str)
    except (ValueError, TypeError, OSError, OverflowError):
        return str(ts)


def escape_cell(text: str) -> str:
    """Keep cell text on one line and away from the column separator"""
    return text.replace("|", "\\|").replace("\n", " ")
