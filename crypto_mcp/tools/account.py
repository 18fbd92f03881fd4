"""
Account operations business logic.

This module provides balance retrieval and the Binance dust conversion log.
"""
import logging
import time
from typing import Any

from crypto_mcp.exceptions import ToolError
from crypto_mcp.formatters import format_balances_as_table
from crypto_mcp.tools.market_data import to_float

logger = logging.getLogger("crypto-mcp.account")


async def get_balance(exchange: Any) -> dict[str, Any]:
    """
    Get non-zero balances of the account.

    Args:
        exchange: Authenticated ccxt exchange instance

    Returns:
        Dictionary containing balances, a timestamp and a formatted table

    Raises:
        ToolError: If the account holds no assets
    """
    balance = await exchange.fetch_balance()
    totals = balance.get("total") or {}
    free = balance.get("free") or {}
    used = balance.get("used") or {}

    assets = [
        {
            "asset": asset,
            "free": to_float(free.get(asset)) or 0.0,
            "used": to_float(used.get(asset)) or 0.0,
            "total": to_float(total) or 0.0,
        }
        for asset, total in totals.items()
        if total is not None and float(total) > 0
    ]
    if not assets:
        raise ToolError("No data.")

    info = balance.get("info") or {}
    timestamp = (info.get("updateTime") if isinstance(info, dict) else None) or balance.get("timestamp")
    logger.info(f"Fetched balance on {exchange.id}: {len(assets)} non-zero assets")

    return {
        "exchange": exchange.id,
        "assets": assets,
        "timestamp": timestamp or int(time.time() * 1000),
        "balances_table": format_balances_as_table(assets),
    }


async def get_dust_log(exchange: Any) -> list[dict[str, Any]]:
    """
    Get the small-balance conversion history (Binance only).

    Raises:
        ToolError: If the exchange is not Binance or the endpoint is unavailable
    """
    if exchange.id != "binance":
        raise ToolError(f"dustLog is only supported on Binance, not {exchange.id}.")

    fetch_dribblet = getattr(exchange, "sapi_get_asset_dribblet", None)
    if fetch_dribblet is None:
        raise ToolError("The installed ccxt version does not expose the Binance dust log endpoint.")

    result = await fetch_dribblet() or {}
    logs = [
        {
            "asset": detail.get("asset"),
            "amount": to_float(detail.get("amount")),
            "service_charge_amount": to_float(detail.get("serviceChargeAmount")),
            "operate_time": detail.get("operateTime"),
            "transfered_amount": to_float(detail.get("transferedAmount")),
            "from_asset": detail.get("fromAsset", detail.get("asset")),
            "to_asset": detail.get("transferedAsset", "BNB"),
            "status": detail.get("transStatus"),
        }
        for entry in result.get("userAssetDribblets", result.get("userAssetDribbletLogVos", []))
        for detail in entry.get("userAssetDribbletDetails", [])
    ]
    logger.info(f"Fetched {len(logs)} dust log entries")
    return logs
