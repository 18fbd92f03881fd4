"""
Trading operations business logic.

This module provides order placement, order queries, cancellation and trade history.
"""
import logging
from typing import Any, Literal

from crypto_mcp.exceptions import ToolError, ValidationError
from crypto_mcp.formatters import format_orders_as_table, format_trades_as_table
from crypto_mcp.schemas import OrderOptions
from crypto_mcp.symbols import resolve_symbol
from crypto_mcp.tools.market_data import to_float

logger = logging.getLogger("crypto-mcp.trading")

OrderSide = Literal["buy", "sell"]


def order_result(order: dict[str, Any], include_remaining: bool = True) -> dict[str, Any]:
    """Reshape a ccxt order into the tool output"""
    result = {
        "order_id": str(order.get("id")),
        "symbol": order.get("symbol"),
        "status": order.get("status"),
        "type": order.get("type"),
        "side": order.get("side"),
        "price": to_float(order.get("price")),
        "amount": to_float(order.get("amount")),
        "filled": to_float(order.get("filled")),
        "timestamp": order.get("timestamp"),
        "info": order.get("info"),
    }
    if include_remaining:
        result["remaining"] = to_float(order.get("remaining"))
    return result


def cancel_result(order: dict[str, Any]) -> dict[str, Any]:
    return {
        "order_id": str(order.get("id")),
        "symbol": order.get("symbol"),
        "status": order.get("status"),
        "info": order.get("info"),
    }


async def place_order(
    exchange: Any,
    side: OrderSide,
    symbol: str,
    quantity: float,
    price: float | None = None,
    options: OrderOptions | None = None,
    params: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Place an order.

    Args:
        exchange: Authenticated ccxt exchange instance
        side: 'buy' or 'sell'
        symbol: Trading pair
        quantity: Order amount in base asset
        price: Limit price, ignored for market orders
        options: Order type and iceberg quantity
        params: Extra exchange-specific parameters

    Returns:
        The placed order
    """
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than 0")

    options = options or OrderOptions()
    is_market = options.type == "market"
    if not is_market and price is None:
        raise ValidationError(f"A price is required for {options.type} orders")

    # Iceberg quantities only apply to orders resting on the book
    order_params = dict(params or {})
    if not is_market:
        order_params.update(options.to_params())

    normalized = await resolve_symbol(exchange, symbol)
    if is_market:
        order = await exchange.create_order(normalized, "market", side, quantity, None, order_params)
    else:
        order = await exchange.create_order(normalized, options.type, side, quantity, price, order_params)

    logger.info(f"Placed {side} {options.type} order on {exchange.id}: {order.get('id')} {normalized} {quantity}@{price}")
    return order_result(order, include_remaining=False)


async def place_market_order(
    exchange: Any,
    side: OrderSide,
    symbol: str,
    quantity: float,
    params: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Place a market order without a price"""
    return await place_order(exchange, side, symbol, quantity, None, OrderOptions(type="market"), params)


async def get_order_status(exchange: Any, symbol: str, order_id: str) -> dict[str, Any]:
    order = await exchange.fetch_order(str(order_id), await resolve_symbol(exchange, symbol))
    if not order:
        raise ToolError("No data.")

    result = order_result(order)
    return {"order": result, "orders_table": format_orders_as_table([result])}


def _orders_response(orders: list[dict[str, Any]]) -> dict[str, Any]:
    if not orders:
        raise ToolError("No data.")

    results = [order_result(order) for order in orders]
    return {"orders": results, "orders_table": format_orders_as_table(results)}


async def get_all_orders(exchange: Any, symbol: str) -> dict[str, Any]:
    """Get active, cancelled and filled orders for a symbol"""
    orders = await exchange.fetch_orders(await resolve_symbol(exchange, symbol))
    return _orders_response(orders)


async def get_open_orders(exchange: Any, symbol: str | None = None) -> dict[str, Any]:
    """Get open orders for a symbol, or for every symbol when omitted"""
    orders = await exchange.fetch_open_orders(await resolve_symbol(exchange, symbol) if symbol else None)
    return _orders_response(orders)


async def cancel_order(exchange: Any, symbol: str, order_id: str) -> dict[str, Any]:
    normalized = await resolve_symbol(exchange, symbol)
    result = await exchange.cancel_order(str(order_id), normalized)
    logger.info(f"Cancelled order {order_id} for {normalized} on {exchange.id}")
    return cancel_result(result)


async def cancel_all_orders(exchange: Any, symbol: str) -> list[dict[str, Any]]:
    """Cancel every open order for a symbol"""
    normalized = await resolve_symbol(exchange, symbol)
    results = await exchange.cancel_all_orders(normalized)
    if results is None:
        results = []
    elif not isinstance(results, list):
        results = [results]

    logger.info(f"Cancelled {len(results)} order(s) for {normalized} on {exchange.id}")
    return [cancel_result(result) for result in results]


async def get_trades(exchange: Any, symbol: str) -> dict[str, Any]:
    """Get the account's trade history for a symbol"""
    raw_trades = await exchange.fetch_my_trades(await resolve_symbol(exchange, symbol))
    if not raw_trades:
        raise ToolError("No data.")

    trades = []
    for trade in raw_trades:
        fee = trade.get("fee")
        trades.append(
            {
                "id": str(trade.get("id")),
                "order_id": str(trade["order"]) if trade.get("order") else None,
                "symbol": trade.get("symbol"),
                "side": trade.get("side"),
                "price": to_float(trade.get("price")),
                "amount": to_float(trade.get("amount")),
                "cost": to_float(trade.get("cost")),
                "fee": {"cost": to_float(fee.get("cost")), "currency": fee.get("currency")} if fee else None,
                "timestamp": trade.get("timestamp"),
                "info": trade.get("info"),
            }
        )

    return {"trades": trades, "trades_table": format_trades_as_table(trades)}
