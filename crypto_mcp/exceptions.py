"""
Custom exceptions for the Crypto MCP Server
"""


class CryptoMCPError(Exception):
    """Base exception for Crypto MCP server"""
    pass


class ToolError(CryptoMCPError):
    """Exception raised when a tool execution fails"""
    pass


class ValidationError(CryptoMCPError):
    """Exception raised when input validation fails"""
    pass


class ConfigurationError(CryptoMCPError):
    """Exception raised when configuration is invalid"""
    pass


class ExchangeNotConfiguredError(CryptoMCPError):
    """Exception raised when an operation needs exchange credentials that are not configured"""
    pass


class UnknownIndicatorError(CryptoMCPError):
    """Exception raised when an indicator name is not supported"""
    pass
