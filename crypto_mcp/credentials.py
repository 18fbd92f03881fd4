"""
Exchange credentials discovery
Reads API keys from environment variables and an optional YAML file
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("crypto-mcp")

TRUTHY = ("1", "true", "yes", "on")


class ExchangeCredentials(BaseModel):
    """API credentials for one exchange"""

    id: str = Field(description="ccxt exchange id")
    api_key: str = Field(default="")
    secret: str = Field(default="")
    password: str | None = Field(default=None, description="Passphrase required by okx, kucoin and similar")
    sandbox: bool = Field(default=False)

    @field_validator("id", mode="before")
    def validate_id(cls, v):
        v = str(v).strip().lower()
        if not v:
            raise ValueError("Exchange id cannot be empty")
        return v

    @property
    def is_complete(self) -> bool:
        return bool(self.api_key.strip() and self.secret.strip())

    def to_ccxt_options(self) -> dict[str, str]:
        options = {"apiKey": self.api_key, "secret": self.secret}
        if self.password:
            options["password"] = self.password
        return options


class CredentialStore:
    """Resolves credentials per exchange id

    Environment variables (``<ID>_API_KEY``, ``<ID>_SECRET`` or ``<ID>_API_SECRET``,
    ``<ID>_PASSWORD`` or ``<ID>_PASSPHRASE``, ``<ID>_SANDBOX``) take precedence over
    entries in the YAML file.
    """

    def __init__(self, config_path: Path | None = None, environ: Mapping[str, str] | None = None):
        self.config_path = config_path
        self._environ = environ
        self._file_credentials: dict[str, ExchangeCredentials] = {}
        self.load_error: str | None = None
        self.reload()

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def reload(self):
        """Load credentials from the YAML file if it exists"""
        self._file_credentials = {}
        self.load_error = None
        if self.config_path is None or not self.config_path.exists():
            return

        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f) or {}
            for entry in data.get("exchanges", []):
                credentials = ExchangeCredentials(**entry)
                self._file_credentials[credentials.id] = credentials
            logger.info(f"Loaded credentials for {len(self._file_credentials)} exchange(s) from {self.config_path}")
        except Exception as e:
            # An unreadable file must not prevent market data access
            self.load_error = f"Failed to load credentials file {self.config_path}: {e}"
            logger.warning(self.load_error)

    def _from_env(self, exchange_id: str) -> ExchangeCredentials | None:
        prefix = exchange_id.upper()
        env = self.environ
        api_key = env.get(f"{prefix}_API_KEY")
        secret = env.get(f"{prefix}_SECRET") or env.get(f"{prefix}_API_SECRET")
        if not api_key and not secret:
            return None
        return ExchangeCredentials(
            id=exchange_id,
            api_key=api_key or "",
            secret=secret or "",
            password=env.get(f"{prefix}_PASSWORD") or env.get(f"{prefix}_PASSPHRASE"),
            sandbox=env.get(f"{prefix}_SANDBOX", "").strip().lower() in TRUTHY,
        )

    def get(self, exchange_id: str) -> ExchangeCredentials | None:
        """Return complete credentials for an exchange, or None when not configured"""
        exchange_id = exchange_id.lower()
        # A half-set environment (key without secret) falls through to the file
        for credentials in (self._from_env(exchange_id), self._file_credentials.get(exchange_id)):
            if credentials is not None and credentials.is_complete:
                return credentials
        return None

    def configured_exchanges(self, exchange_ids: list[str]) -> list[str]:
        """Filter exchange ids down to the ones with complete credentials"""
        return [exchange_id for exchange_id in exchange_ids if self.get(exchange_id) is not None]
