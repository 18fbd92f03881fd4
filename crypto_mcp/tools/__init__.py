"""
Tools package for the Crypto MCP server.

Business logic for every tool lives here; ``crypto_mcp.server`` only wires it to MCP.
"""
