"""
Centralized request schemas for Crypto MCP tools.

This module contains the Pydantic models used to validate structured tool options.
"""
import datetime as dt
import re
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

# ==============================================================================
# Market Data Schemas
# ==============================================================================


class CandlestickOptions(BaseModel):
    """Optional parameters forwarded to ``fetch_ohlcv``"""

    since: int | None = Field(
        default=None,
        description="Start time in milliseconds since epoch",
        examples=[1704067200000],
    )

    limit: int | None = Field(
        default=None,
        gt=0,
        description="Maximum number of candles to return",
        examples=[100, 500],
    )

    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra exchange-specific parameters",
    )


# ==============================================================================
# Trading Schemas
# ==============================================================================

OrderType = Literal[
    "limit",
    "market",
    "STOP_LOSS",
    "STOP_LOSS_LIMIT",
    "TAKE_PROFIT",
    "TAKE_PROFIT_LIMIT",
]


class OrderOptions(BaseModel):
    """Options for limit-style orders placed through ``buy`` and ``sell``"""

    type: OrderType = Field(default="limit", description="Order type")

    iceberg_qty: float | None = Field(
        default=None,
        gt=0,
        description="Visible quantity of an iceberg order",
    )

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Accept LIMIT/MARKET in any case while keeping the stop types upper-case"""
        if isinstance(v, str):
            if v.lower() in ("limit", "market"):
                return v.lower()
            return v.upper()
        return v

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.iceberg_qty is not None:
            params["icebergQty"] = self.iceberg_qty
        return params


# ==============================================================================
# Indicator Schemas
# ==============================================================================

DEFAULT_INDICATORS = ["macd", "rsi", "bollinger bands", "kdj", "ema", "atr", "cmf"]


class IndicatorParameters(BaseModel):
    """Numeric parameters shared by every requested indicator"""

    period: int = Field(default=14, gt=0)
    fast_period: int = Field(default=12, gt=0)
    slow_period: int = Field(default=26, gt=0)
    signal_period: int = Field(default=9, gt=0)
    std_dev: float = Field(default=2, gt=0)


# ==============================================================================
# Log Schemas
# ==============================================================================

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogQuery(BaseModel):
    """Filters applied when reading a log file"""

    date: str = Field(
        default="today",
        description="Date of the log file: YYYY-MM-DD, 'today' or 'yesterday'",
    )

    search: str | None = Field(default=None, description="Case-insensitive substring filter")

    level: LogLevel | None = Field(default=None, description="Minimum log level to include")

    tail: int | None = Field(default=None, gt=0, description="Only return the last N matching lines")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        v = v.strip().lower()
        if v in ("today", "yesterday"):
            return v
        if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", v):
            raise ValueError("Date must be YYYY-MM-DD, 'today' or 'yesterday'")
        dt.datetime.strptime(v, "%Y-%m-%d")
        return v

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.upper()
            return "WARNING" if v == "WARN" else v
        return v

    def resolve_date(self, today: dt.date | None = None) -> dt.date:
        """Turn the relative date keywords into a calendar date"""
        today = today or dt.date.today()
        if self.date == "today":
            return today
        if self.date == "yesterday":
            return today - dt.timedelta(days=1)
        return dt.datetime.strptime(self.date, "%Y-%m-%d").date()
