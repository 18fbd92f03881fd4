"""
Configuration settings for Crypto MCP Server
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from crypto_mcp.exceptions import ConfigurationError

# Earlier files win, variables already in the environment are never overridden
ENV_FILES = [".env.local", ".env.development", ".env.production", ".env"]

DEFAULT_HOME = Path.home() / ".crypto-mcp-server"


def load_env_files(root_dir: Path | None = None) -> list[Path]:
    """Load dotenv files from the working directory, returning the files that were found"""
    root_dir = root_dir or Path.cwd()
    loaded = []
    for name in ENV_FILES:
        env_path = root_dir / name
        if env_path.is_file():
            load_dotenv(env_path, override=False)
            loaded.append(env_path)
    return loaded


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Application settings"""

    # Exchange defaults
    default_exchange: str = Field(default="binance")
    credentials_file: Path = Field(default=DEFAULT_HOME / "exchanges.yml")
    request_timeout_ms: int = Field(default=30000, gt=0)
    enable_rate_limit: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=DEFAULT_HOME / "logs")
    log_retention_days: int = Field(default=7, ge=1)

    # Candle snapshots written next to the logs
    save_candles: bool = Field(default=True)

    @field_validator("default_exchange", mode="before")
    def validate_default_exchange(cls, v):
        v = str(v).strip().lower()
        if not v:
            raise ValueError("Default exchange cannot be empty")
        return v

    @field_validator("log_level", mode="before")
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = str(v).upper()
        if level == "WARN":
            level = "WARNING"
        if level not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return level

    @field_validator("log_dir", "credentials_file", mode="before")
    def expand_path(cls, v):
        return Path(v).expanduser()


def get_settings() -> Settings:
    """Get application settings from environment variables"""
    try:
        return Settings(
            default_exchange=os.getenv("CRYPTO_MCP_DEFAULT_EXCHANGE", "binance"),
            credentials_file=os.getenv("CRYPTO_MCP_CREDENTIALS_FILE", str(DEFAULT_HOME / "exchanges.yml")),
            request_timeout_ms=int(os.getenv("CRYPTO_MCP_TIMEOUT_MS", "30000")),
            enable_rate_limit=_env_flag("CRYPTO_MCP_ENABLE_RATE_LIMIT", True),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("CRYPTO_MCP_LOG_DIR", str(DEFAULT_HOME / "logs")),
            log_retention_days=int(os.getenv("CRYPTO_MCP_LOG_RETENTION_DAYS", "7")),
            save_candles=_env_flag("CRYPTO_MCP_SAVE_CANDLES", True),
        )
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}")


load_env_files()

# Global settings instance
settings = get_settings()
