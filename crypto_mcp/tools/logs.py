"""
Log analysis business logic.

Reads the server's own daily log files and filters them by text, level and recency.
"""
import logging
import re
from datetime import date
from pathlib import Path
from typing import Any

from crypto_mcp.exceptions import ToolError
from crypto_mcp.logging import LOG_FILE_NAME
from crypto_mcp.schemas import LogQuery

logger = logging.getLogger("crypto-mcp.logs")

LEVEL_ORDER = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Matches the record prefix written by setup_logging
RECORD_START = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")
RECORD_LEVEL = re.compile(r" - (DEBUG|INFO|WARNING|ERROR|CRITICAL) - ")


def resolve_log_file(log_dir: Path, target_date: date, today: date | None = None) -> Path:
    """Path of the log file holding a given day

    Today's records live in the active file; older days were rotated to ``<name>.<YYYY-MM-DD>``.
    """
    today = today or date.today()
    if target_date == today:
        return log_dir / LOG_FILE_NAME
    return log_dir / f"{LOG_FILE_NAME}.{target_date.isoformat()}"


def split_records(text: str) -> list[str]:
    """Group lines into records so that tracebacks stay attached to their message"""
    records: list[list[str]] = []
    for line in text.splitlines():
        if RECORD_START.match(line) or not records:
            records.append([line])
        else:
            records[-1].append(line)
    return ["\n".join(lines) for lines in records]


def record_level(record: str) -> str | None:
    match = RECORD_LEVEL.search(record.split("\n", 1)[0])
    return match.group(1) if match else None


def filter_records(records: list[str], query: LogQuery) -> list[str]:
    if query.search:
        needle = query.search.lower()
        records = [record for record in records if needle in record.lower()]

    if query.level:
        minimum = LEVEL_ORDER.index(query.level)
        records = [
            record
            for record in records
            if (level := record_level(record)) is not None and LEVEL_ORDER.index(level) >= minimum
        ]

    if query.tail:
        records = records[-query.tail:]
    return records


def analyze_logs(query: LogQuery, log_dir: Path, today: date | None = None) -> dict[str, Any]:
    """
    Read and filter the log file of a day.

    Args:
        query: Date and filters
        log_dir: Directory holding the log files
        today: Reference date for 'today'/'yesterday'

    Returns:
        Dictionary with the file path, matching record count and the filtered content

    Raises:
        ToolError: If the log directory or the file for that day does not exist
    """
    if not log_dir.is_dir():
        raise ToolError(f"Log directory not found: {log_dir}")

    target_date = query.resolve_date(today)
    log_file = resolve_log_file(log_dir, target_date, today)
    if not log_file.is_file():
        raise ToolError(f"No log file found for date: {target_date.isoformat()}")

    content = log_file.read_text(encoding="utf-8", errors="replace")
    filtered = query.search or query.level or query.tail
    if filtered:
        records = filter_records(split_records(content), query)
        content = "\n".join(records) if records else "No matching log entries."
        count = len(records)
    else:
        count = len(split_records(content))

    logger.debug(f"analyzeLogs read {log_file}: {count} record(s)")
    return {"file": str(log_file), "date": target_date.isoformat(), "records": count, "content": content}
