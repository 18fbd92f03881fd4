"""
Portfolio prompts - balances, holdings and overall trading status.
"""
from crypto_mcp.exchange_client import exchange_client

from .base import exchange_hint, logger, validate_choice

BALANCE_PROVIDERS = ["binance", "gate"]


def portfolio_analysis_text(exchange: str | None = None) -> str:
    return f"""Please analyze my current crypto portfolio and provide insights.

{exchange_hint(exchange)}

1. Use the "balance" tool to retrieve my current holdings
2. Calculate the total portfolio value in USD (using the "prices" tool for each asset)
3. Analyze the portfolio allocation and diversification
4. Check the current market status of each holding using the "prices" and "prevDay" tools
5. Provide suggestions for rebalancing or optimizing the portfolio based on current market conditions"""


def trading_status_text(exchange: str | None = None) -> str:
    return f"""Please provide a comprehensive overview of my current trading status.

{exchange_hint(exchange)}

1. Use the "balance" tool to check my account balance and current holdings
2. Use the "openOrders" tool to view my pending orders
3. Summarize my overall trading status, including total value, exposure to different assets, and pending orders
4. Provide any relevant recommendations based on current market conditions"""


def query_balance_text(provider: str | None = None, configured: list[str] | None = None) -> str:
    if provider:
        provider = validate_choice("provider", provider, BALANCE_PROVIDERS)
        text = f'I want to check my account balance on {provider}.\n\nPlease use the "balance" tool with exchange="{provider}".'
    else:
        targets = ", ".join(configured) if configured else "every exchange with API credentials"
        text = (
            f"I want to check my account balance on all configured exchanges ({targets}).\n\n"
            'Please use the "balance" tool once per exchange.'
        )

    text += "\n- For each exchange, leave out assets whose total balance is 0."
    text += "\n- Present the result in a table with columns: asset, free, used, total."
    text += "\n- If querying multiple exchanges, group the tables by exchange."
    return text


def register_portfolio_prompts(mcp):
    """Register portfolio and account prompts."""

    @mcp.prompt(name="portfolioAnalysis")
    def portfolio_analysis(exchange: str | None = None) -> str:
        """Analyze holdings, allocation and the market status of each asset.

        Args:
            exchange: Exchange id, e.g., binance, okx, gate
        """
        logger.debug(f"Prompt portfolioAnalysis - Input parameters: exchange={exchange}")
        return portfolio_analysis_text(exchange)

    @mcp.prompt(name="tradingStatus")
    def trading_status(exchange: str | None = None) -> str:
        """Summarize balances and pending orders.

        Args:
            exchange: Exchange id, e.g., binance, okx, gate
        """
        logger.debug(f"Prompt tradingStatus - Input parameters: exchange={exchange}")
        return trading_status_text(exchange)

    @mcp.prompt(name="queryAccountBalancePrompt")
    def query_account_balance(provider: str | None = None) -> str:
        """Check account balances on one exchange or on every configured exchange.

        Args:
            provider: Which exchange to query: binance, gate, or leave empty for all
        """
        logger.debug(f"Prompt queryAccountBalancePrompt - Input parameters: provider={provider}")
        return query_balance_text(provider, exchange_client.available_exchanges())
