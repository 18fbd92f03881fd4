"""
ccxt exchange wrapper with lazy instance management
"""

import logging
from typing import Any

import ccxt
import ccxt.async_support as ccxt_async

from crypto_mcp.credentials import CredentialStore
from crypto_mcp.exceptions import ExchangeNotConfiguredError, ValidationError
from crypto_mcp.settings import settings

logger = logging.getLogger("crypto-mcp")


class ExchangeClient:
    """Holds one async ccxt instance per exchange id, created on first use"""

    def __init__(self, credential_store: CredentialStore | None = None):
        self.credentials = credential_store or CredentialStore(settings.credentials_file)
        self._exchanges: dict[str, ccxt_async.Exchange] = {}
        self._current_exchange_id: str | None = None

    @staticmethod
    def supported_exchanges() -> list[str]:
        return list(ccxt.exchanges)

    @property
    def current_exchange_id(self) -> str:
        """The last exchange used, or the default one"""
        return self._current_exchange_id or settings.default_exchange

    def resolve_exchange_id(self, exchange_id: str | None = None) -> str:
        """Validate an exchange id, falling back to the default exchange"""
        if not exchange_id:
            logger.warning(f"No exchange specified, defaulting to {settings.default_exchange}.")
            exchange_id = settings.default_exchange

        exchange_id = exchange_id.strip().lower()
        if exchange_id not in ccxt.exchanges:
            raise ValidationError(
                f"Unsupported exchange '{exchange_id}'. Use one of the ccxt exchange ids, e.g. binance, okx, bybit"
            )
        return exchange_id

    def _create_exchange(self, exchange_id: str) -> ccxt_async.Exchange:
        config: dict[str, Any] = {
            "enableRateLimit": settings.enable_rate_limit,
            "timeout": settings.request_timeout_ms,
        }
        credentials = self.credentials.get(exchange_id)
        if credentials:
            config.update(credentials.to_ccxt_options())

        exchange_class = getattr(ccxt_async, exchange_id)
        exchange = exchange_class(config)
        if credentials and credentials.sandbox:
            exchange.set_sandbox_mode(True)

        logger.info(
            f"Created {exchange_id} exchange instance "
            f"({'authenticated' if credentials else 'public'}{', sandbox' if credentials and credentials.sandbox else ''})"
        )
        return exchange

    async def get_exchange(self, exchange_id: str | None = None, authenticated: bool = False) -> ccxt_async.Exchange:
        """Get the exchange instance for an id

        Args:
            exchange_id: ccxt exchange id, the default exchange when omitted
            authenticated: Require API credentials for the exchange
        """
        exchange_id = self.resolve_exchange_id(exchange_id)
        if authenticated:
            self.require_credentials(exchange_id)

        if exchange_id not in self._exchanges:
            self._exchanges[exchange_id] = self._create_exchange(exchange_id)

        self._current_exchange_id = exchange_id
        return self._exchanges[exchange_id]

    def has_credentials(self, exchange_id: str) -> bool:
        return self.credentials.get(exchange_id) is not None

    def require_credentials(self, exchange_id: str):
        if not self.has_credentials(exchange_id):
            prefix = exchange_id.upper()
            raise ExchangeNotConfiguredError(
                f"Exchange '{exchange_id}' has no API credentials configured. "
                f"Set {prefix}_API_KEY and {prefix}_SECRET to use account and trading features."
            )

    def available_exchanges(self) -> list[str]:
        """Exchange ids with API credentials configured"""
        return self.credentials.configured_exchanges(self.supported_exchanges())

    def check_exchange_configs(self) -> list[dict[str, Any]]:
        """Report readiness of every supported exchange"""
        results = []
        for exchange_id in self.supported_exchanges():
            try:
                # The sync class is enough to read the display name and opens no session
                name = getattr(ccxt, exchange_id)().name
            except Exception as e:
                results.append({"id": exchange_id, "name": exchange_id, "ready": False, "error": str(e)})
                continue

            ready = self.has_credentials(exchange_id)
            results.append(
                {
                    "id": exchange_id,
                    "name": name,
                    "ready": ready,
                    "error": None if ready else "Missing API key/secret",
                }
            )
        return results

    async def close(self):
        """Close every exchange instance"""
        for exchange_id, exchange in list(self._exchanges.items()):
            try:
                await exchange.close()
            except Exception as e:
                logger.warning(f"Failed to close {exchange_id} exchange: {e}")
        self._exchanges.clear()
        self._current_exchange_id = None


# Global client instance
exchange_client = ExchangeClient()
