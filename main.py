#!/usr/bin/env python3
"""
Entry point for the Crypto MCP Server
"""

import asyncio

from crypto_mcp import main

if __name__ == "__main__":
    asyncio.run(main())
