"""
Crypto MCP Server

A Model Context Protocol server exposing crypto exchange market data, account
operations and technical indicators across the exchanges supported by ccxt.
"""

__version__ = "0.1.0"

from .server import main

__all__ = ["main"]
