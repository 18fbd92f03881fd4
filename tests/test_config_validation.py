"""
Tests for configuration validation and the status report.
"""

from crypto_mcp.config_validation import get_configuration_report, validate_environment_config
from crypto_mcp.credentials import CredentialStore
from crypto_mcp.exchange_client import ExchangeClient
from crypto_mcp.settings import settings


def make_client(environ: dict[str, str]) -> ExchangeClient:
    return ExchangeClient(CredentialStore(environ=environ))


class TestValidateEnvironmentConfig:
    """Test the validation result."""

    def test_without_credentials(self):
        result = validate_environment_config(make_client({}))

        assert result.is_valid
        assert not result.has_api_credentials
        assert result.summary == "⚠️  Limited functionality - API credentials not configured"
        assert "🔑 No exchange API credentials are configured" in result.warnings

    def test_with_credentials(self):
        result = validate_environment_config(make_client({"BINANCE_API_KEY": "k", "BINANCE_SECRET": "s"}))

        assert result.is_valid
        assert result.configured_exchanges == ["binance"]
        assert result.warnings == []
        assert result.summary == "✅ All environment variables are properly configured"

    def test_invalid_default_exchange(self, monkeypatch):
        monkeypatch.setattr(settings, "default_exchange", "nope")

        result = validate_environment_config(make_client({}))

        assert not result.is_valid
        assert result.summary.startswith("❌")
        assert "Default exchange 'nope' is not a supported ccxt exchange id" in result.errors

    def test_credentials_file_error_is_warning(self, tmp_path):
        config = tmp_path / "exchanges.yml"
        config.write_text("exchanges: [")
        client = ExchangeClient(CredentialStore(config, environ={"BINANCE_API_KEY": "k", "BINANCE_SECRET": "s"}))

        result = validate_environment_config(client)

        assert result.is_valid
        assert result.summary == "⚠️  Configuration has minor warnings but API credentials are configured"


class TestConfigurationReport:
    """Test the rendered report."""

    def test_report_without_credentials(self):
        report = get_configuration_report(make_client({}))

        assert report.startswith("🔧 Crypto MCP Server Configuration Status")
        assert f"🏦 Default Exchange: {settings.default_exchange}" in report
        assert "🔒 Account-specific operations: Unavailable" in report
        assert "📚 Quick Setup Guide:" in report

    def test_report_with_credentials(self):
        report = get_configuration_report(make_client({"OKX_API_KEY": "k", "OKX_SECRET": "s"}))

        assert "✅ okx: API key and secret configured" in report
        assert "🔓 Account-specific operations: Available" in report
        assert "Quick Setup Guide" not in report
