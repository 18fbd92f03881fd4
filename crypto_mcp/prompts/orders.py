"""
Order prompts - guided order placement, cancellation and listing.
"""
from .base import logger, validate_choice

ORDER_SIDES = ["BUY", "SELL"]
ORDER_TYPES = ["MARKET", "LIMIT"]


def create_order_text(symbol: str, side: str, quantity: str, type: str = "MARKET", price: str | None = None) -> str:
    side = validate_choice("side", side, ORDER_SIDES)
    type = validate_choice("type", type, ORDER_TYPES)
    tool_side = side.lower()

    text = f"I want to place an order for {symbol} ({side}) with quantity {quantity}"
    if type == "LIMIT":
        text += " as a LIMIT order"
        if price:
            text += f" at price {price}."
        else:
            text += '. Please fetch the latest price using the "prices" tool and suggest a reasonable limit price.'
        text += f'\n\nPlease use the "{tool_side}" tool. Required parameters:'
        text += f"\n- symbol: {symbol}\n- quantity: {quantity}"
        text += f"\n- price: {price or '(suggested from the latest price, confirm with the user first)'}"
    else:
        text += " as a MARKET order."
        text += f'\n\nPlease use the "market{tool_side.capitalize()}" tool. Required parameters:'
        text += f"\n- symbol: {symbol}\n- quantity: {quantity}"

    text += "\n\nShow the order result (order_id, status, filled amount) once it is placed."
    return text


def cancel_order_text(symbol: str | None = None) -> str:
    text = "I want to cancel an order."
    text += '\n\nFirst, use the "openOrders" tool'
    if symbol:
        text += f" for symbol {symbol}"
    text += " to list all open orders."
    text += "\n\nThen, ask the user to specify which order to cancel."
    text += '\n\nTo cancel, use the "cancel" tool with parameters:'
    text += "\n- symbol: (required)"
    text += "\n- order_id: (required, from the open orders list)"
    text += "\n\nIf the user does not know the order_id, help them find it from the open orders list."
    return text


def open_orders_text(symbol: str | None = None) -> str:
    text = "Please list all my open orders"
    if symbol:
        text += f" for symbol {symbol}"
    text += '.\n\nUse the "openOrders" tool to fetch the open orders.'
    text += "\n\nDisplay the order_id, symbol, side, price, amount, filled amount and order type for each open order."
    return text


def register_order_prompts(mcp):
    """Register order management prompts."""

    @mcp.prompt(name="createOrderPrompt")
    def create_order(symbol: str, side: str, quantity: str, type: str = "MARKET", price: str | None = None) -> str:
        """Guide the placement of a market or limit order.

        Args:
            symbol: Trading pair symbol, e.g., BTC/USDT, ETH/USDT
            side: Order side: BUY or SELL
            quantity: Order quantity (in base asset)
            type: Order type: MARKET (default) or LIMIT
            price: Limit price (required for LIMIT orders)
        """
        logger.debug(
            f"Prompt createOrderPrompt - Input parameters: symbol={symbol}, side={side}, "
            f"quantity={quantity}, type={type}, price={price}"
        )
        return create_order_text(symbol, side, quantity, type, price)

    @mcp.prompt(name="cancelOrderPrompt")
    def cancel_order(symbol: str | None = None) -> str:
        """Guide the cancellation of an open order.

        Args:
            symbol: Trading pair symbol (optional, leave empty to list all open orders)
        """
        logger.debug(f"Prompt cancelOrderPrompt - Input parameters: symbol={symbol}")
        return cancel_order_text(symbol)

    @mcp.prompt(name="getOpenOrdersPrompt")
    def get_open_orders(symbol: str | None = None) -> str:
        """List open orders.

        Args:
            symbol: Trading pair symbol (optional, leave empty to get all)
        """
        logger.debug(f"Prompt getOpenOrdersPrompt - Input parameters: symbol={symbol}")
        return open_orders_text(symbol)
