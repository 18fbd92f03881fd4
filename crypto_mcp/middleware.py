"""
Decorators shared by the MCP tool functions.

They resolve the ccxt exchange instance a tool runs against and turn failures
into ToolError messages for the MCP client.
"""
import functools
import inspect
import logging
from typing import Any, Callable, Coroutine, TypeVar

from crypto_mcp.exceptions import (
    ExchangeNotConfiguredError,
    ToolError,
    UnknownIndicatorError,
    ValidationError,
)
from crypto_mcp.exchange_client import exchange_client

logger = logging.getLogger("crypto-mcp")

# Return type of the wrapped coroutine
T = TypeVar("T")

EXCHANGE_PARAMETER = inspect.Parameter(
    "exchange",
    inspect.Parameter.KEYWORD_ONLY,
    default=None,
    annotation=str | None,
)


def with_exchange(
    authenticated: bool = False,
) -> Callable[[Callable[..., Coroutine[Any, Any, T]]], Callable[..., Coroutine[Any, Any, T]]]:
    """
    Decorator to inject a ccxt exchange instance as the first argument.

    The wrapped function accepts an optional ``exchange`` keyword with the ccxt exchange
    id instead. Its public signature is rewritten accordingly so MCP tool schemas expose
    ``exchange`` as a plain string.

    Example:
        @with_exchange(authenticated=True)
        async def balance(exchange):
            return await exchange.fetch_balance()

        # Called as:
        result = await balance(exchange="okx")

    Args:
        authenticated: Require API credentials for the exchange
    """
    def decorator(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., Coroutine[Any, Any, T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, exchange: str | None = None, **kwargs: Any) -> T:
            logger.debug(f"{func.__name__} called with exchange={exchange}, args={args}, kwargs={kwargs}")
            instance = await exchange_client.get_exchange(exchange, authenticated=authenticated)
            return await func(instance, *args, **kwargs)

        signature = inspect.signature(func)
        parameters = list(signature.parameters.values())[1:]
        wrapper.__signature__ = signature.replace(parameters=parameters + [EXCHANGE_PARAMETER])
        return wrapper
    return decorator


def handle_errors(action_name: str) -> Callable[[Callable[..., Coroutine[Any, Any, T]]], Callable[..., Coroutine[Any, Any, T]]]:
    """
    Decorator converting tool failures into ToolError.

    Failures are mapped as follows:
    - ToolError passes through unchanged
    - Missing credentials, invalid input and unknown indicators keep their message
    - Anything else (ccxt errors included) is logged and prefixed with "Failed to <action>"

    Args:
        action_name: Description of the action for error messages (e.g., "get prices", "place order")
    """
    def decorator(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., Coroutine[Any, Any, T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except ToolError:
                raise
            except (ExchangeNotConfiguredError, ValidationError, UnknownIndicatorError) as e:
                logger.warning(f"{action_name} rejected: {e}")
                raise ToolError(str(e))
            except Exception as e:
                logger.error(f"{action_name} failed: {str(e)}", exc_info=True)
                raise ToolError(f"Failed to {action_name}: {str(e)}")
        return wrapper
    return decorator


def tool_handler(
    action_name: str, authenticated: bool = False
) -> Callable[[Callable[..., Coroutine[Any, Any, T]]], Callable[..., Coroutine[Any, Any, T]]]:
    """
    Combined decorator that applies both with_exchange and handle_errors.

    The decorated function should expect the exchange instance as its first parameter.

    Example:
        @tool_handler("get prices")
        async def prices(exchange, symbol: str | None = None):
            return await exchange.fetch_ticker(symbol)

        # Called as:
        result = await prices(symbol="BTC/USDT", exchange="binance")
    """
    def decorator(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., Coroutine[Any, Any, T]]:
        # Errors from exchange resolution are caught as well
        return handle_errors(action_name)(with_exchange(authenticated)(func))
    return decorator
