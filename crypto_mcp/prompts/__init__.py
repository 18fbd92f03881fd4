"""
MCP Prompts for guided crypto workflows.

These prompts provide step-by-step guidance for market analysis, portfolio review,
order management and log troubleshooting, and work across all MCP-compatible clients.
"""

from .market_analysis import register_market_analysis_prompts
from .orders import register_order_prompts
from .portfolio import register_portfolio_prompts
from .troubleshoot import register_troubleshoot_prompts


def register_all_prompts(mcp):
    """Register all prompts with the MCP server."""
    register_market_analysis_prompts(mcp)
    register_portfolio_prompts(mcp)
    register_troubleshoot_prompts(mcp)
    register_order_prompts(mcp)
