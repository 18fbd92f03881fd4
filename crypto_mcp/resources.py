"""
MCP resources: supported exchanges, project introduction and configuration status
"""

import logging
from pathlib import Path

from crypto_mcp.config_validation import get_configuration_report
from crypto_mcp.exchange_client import exchange_client
from crypto_mcp.formatters import to_json
from crypto_mcp.settings import settings

logger = logging.getLogger("crypto-mcp.resources")

README_PATH = Path(__file__).resolve().parent.parent / "README.md"


def supported_exchanges_text() -> str:
    return to_json(
        {
            "configured": exchange_client.available_exchanges(),
            "default": settings.default_exchange,
            "supported": exchange_client.supported_exchanges(),
        }
    )


def project_intro_text(readme_path: Path = README_PATH) -> str:
    return readme_path.read_text(encoding="utf-8")


def register_resources(mcp):
    """Register all resources with the MCP server."""

    @mcp.resource("crypto://supported-exchanges", name="supportedExchanges", mime_type="application/json")
    def supported_exchanges() -> str:
        """Exchanges with API credentials, the default exchange and every ccxt exchange id"""
        logger.debug("Resource supportedExchanges requested")
        try:
            return supported_exchanges_text()
        except Exception as e:
            logger.error(f"Error fetching supported exchanges: {e}")
            raise

    @mcp.resource("crypto://project-intro", name="projectIntro", mime_type="text/markdown")
    def project_intro() -> str:
        """Project introduction from the README"""
        logger.debug("Resource projectIntro requested")
        try:
            return project_intro_text()
        except Exception as e:
            logger.error(f"Error fetching project introduction: {e}")
            raise

    @mcp.resource("crypto://config-status", name="configStatus", mime_type="text/plain")
    def config_status() -> str:
        """Configuration status report"""
        logger.debug("Resource configStatus requested")
        try:
            return get_configuration_report()
        except Exception as e:
            logger.error(f"Error building configuration report: {e}")
            raise
