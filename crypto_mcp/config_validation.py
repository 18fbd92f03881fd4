"""
Configuration validation and status report
"""

from dataclasses import dataclass, field

from crypto_mcp.exchange_client import ExchangeClient, exchange_client
from crypto_mcp.settings import settings


@dataclass
class ConfigValidationResult:
    is_valid: bool
    summary: str
    has_api_credentials: bool
    configured_exchanges: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


MISSING_CREDENTIALS_WARNINGS = [
    "🔑 No exchange API credentials are configured",
    "📝 Features requiring authentication will not work:",
    "   • Account balance queries",
    "   • Order placement and cancellation",
    "   • Open orders and order history",
    "   • Trade history and dust log",
    "",
    "💡 To configure API credentials:",
    "   1. Create a .env file in the project root",
    "   2. Add <EXCHANGE>_API_KEY and <EXCHANGE>_SECRET, for example:",
    "      BINANCE_API_KEY=your_api_key_here",
    "      BINANCE_SECRET=your_api_secret_here",
    "   3. Restart the MCP server",
    "",
    "🔒 Note: API keys are only required for account-specific operations.",
    "    Market data queries (prices, candlesticks, indicators) work without API keys.",
]


def validate_environment_config(client: ExchangeClient | None = None) -> ConfigValidationResult:
    """Check credentials and exchange settings"""
    client = client or exchange_client
    warnings: list[str] = []
    errors: list[str] = []

    if settings.default_exchange not in client.supported_exchanges():
        errors.append(f"Default exchange '{settings.default_exchange}' is not a supported ccxt exchange id")

    if client.credentials.load_error:
        warnings.append(f"📄 {client.credentials.load_error}")

    configured = client.available_exchanges()
    has_api_credentials = bool(configured)
    if not has_api_credentials:
        warnings.extend(MISSING_CREDENTIALS_WARNINGS)

    if errors:
        summary = "❌ Configuration has errors that prevent proper operation"
    elif warnings:
        summary = (
            "⚠️  Configuration has minor warnings but API credentials are configured"
            if has_api_credentials
            else "⚠️  Limited functionality - API credentials not configured"
        )
    else:
        summary = "✅ All environment variables are properly configured"

    return ConfigValidationResult(
        is_valid=not errors,
        summary=summary,
        has_api_credentials=has_api_credentials,
        configured_exchanges=configured,
        warnings=warnings,
        errors=errors,
    )


def get_configuration_report(client: ExchangeClient | None = None) -> str:
    """Render the configuration status for display"""
    validation = validate_environment_config(client)
    lines = [
        "🔧 Crypto MCP Server Configuration Status",
        "=" * 50,
        "",
        f"📊 Overall Status: {validation.summary}",
        f"🏦 Default Exchange: {settings.default_exchange}",
        "",
        "🔑 API Credentials:",
    ]

    if validation.has_api_credentials:
        for exchange_id in validation.configured_exchanges:
            lines.append(f"   ✅ {exchange_id}: API key and secret configured")
        lines.append("   🔓 Account-specific operations: Available")
    else:
        lines.append("   ❌ No exchange has an API key and secret configured")
        lines.append("   🔒 Account-specific operations: Unavailable")
    lines.append("")

    lines.append("🚀 Available Features:")
    lines.append("   ✅ Market data queries (prices, candlesticks, 24h statistics)")
    lines.append("   ✅ Technical indicators")
    lines.append("   ✅ Order book data")
    if validation.has_api_credentials:
        lines.append("   ✅ Account balance")
        lines.append("   ✅ Order placement and cancellation")
        lines.append("   ✅ Open orders and order history")
        lines.append("   ✅ Trade history")
    else:
        lines.append("   ❌ Account balance (requires API key)")
        lines.append("   ❌ Order placement and cancellation (requires API key)")
        lines.append("   ❌ Open orders and order history (requires API key)")
        lines.append("   ❌ Trade history (requires API key)")
    lines.append("")

    if validation.errors:
        lines.append("❌ Configuration Errors:")
        lines.extend(f"   {error}" for error in validation.errors)
        lines.append("")

    if validation.warnings:
        lines.append("⚠️  Configuration Warnings:")
        lines.extend(f"   {warning}" for warning in validation.warnings)
        lines.append("")

    if not validation.has_api_credentials:
        lines.extend(
            [
                "📚 Quick Setup Guide:",
                "   1. Open the API management page of your exchange",
                '   2. Create a new API key with "Read" permissions (add "Trade" to place orders)',
                "   3. Copy the API Key and Secret Key",
                "   4. Create a .env file in your project root:",
                "      BINANCE_API_KEY=your_api_key_here",
                "      BINANCE_SECRET=your_secret_key_here",
                "   5. Restart the MCP server",
                "",
                "🛡️  Security Note: Never share your API keys publicly!",
            ]
        )

    return "\n".join(lines)
