"""
Logging configuration for Crypto MCP Server
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOGGER_NAME = "crypto-mcp"
LOG_FILE_NAME = "crypto-mcp.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_dir: Path | None = None, retention_days: int = 7) -> logging.Logger:
    """Setup logging configuration

    Logs always go to stderr because stdout carries the stdio transport. When a
    log directory is given, a daily rotating file is written there as well.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            when="midnight",
            backupCount=retention_days,
            encoding="utf-8",
        )
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    # Create and return logger for this package
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level))

    return logger
