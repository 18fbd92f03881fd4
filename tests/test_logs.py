"""
Tests for log file analysis.
"""

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from crypto_mcp.exceptions import ToolError
from crypto_mcp.schemas import LogQuery
from crypto_mcp.tools.logs import analyze_logs, record_level, resolve_log_file, split_records

TODAY = date(2024, 3, 15)

LOG_TEXT = """2024-03-15 10:00:00 - crypto-mcp - INFO - Starting Crypto MCP Server
2024-03-15 10:00:01 - crypto-mcp - DEBUG - prices called with exchange=None
2024-03-15 10:00:02 - crypto-mcp - WARNING - No exchange specified, defaulting to binance.
2024-03-15 10:00:03 - crypto-mcp - ERROR - get prices failed: binance GET https://api.binance.com timed out
Traceback (most recent call last):
  File "ccxt/async_support/base/exchange.py", line 1, in fetch
ccxt.base.errors.RequestTimeout: timed out
2024-03-15 10:00:04 - crypto-mcp - INFO - Fetched prices on binance for BTC/USDT
"""


@pytest.fixture
def log_dir(tmp_path):
    (tmp_path / "crypto-mcp.log").write_text(LOG_TEXT, encoding="utf-8")
    (tmp_path / "crypto-mcp.log.2024-03-14").write_text(
        "2024-03-14 23:59:59 - crypto-mcp - CRITICAL - Server crashed\n", encoding="utf-8"
    )
    return tmp_path


class TestLogQuery:
    """Test log query validation."""

    def test_relative_dates(self):
        assert LogQuery().resolve_date(TODAY) == TODAY
        assert LogQuery(date="Yesterday").resolve_date(TODAY) == date(2024, 3, 14)
        assert LogQuery(date="2024-01-02").resolve_date(TODAY) == date(2024, 1, 2)

    @pytest.mark.parametrize("value", ["15/03/2024", "2024-13-01", "last week"])
    def test_invalid_dates(self, value):
        with pytest.raises(PydanticValidationError):
            LogQuery(date=value)

    def test_level_aliases(self):
        assert LogQuery(level="warn").level == "WARNING"
        assert LogQuery(level="error").level == "ERROR"


class TestRecords:
    """Test record grouping."""

    def test_traceback_attached_to_record(self):
        records = split_records(LOG_TEXT)

        assert len(records) == 5
        assert records[3].endswith("ccxt.base.errors.RequestTimeout: timed out")
        assert record_level(records[3]) == "ERROR"

    def test_level_of_unstructured_line(self):
        assert record_level("plain text") is None

    def test_log_file_names(self, tmp_path):
        assert resolve_log_file(tmp_path, TODAY, TODAY).name == "crypto-mcp.log"
        assert resolve_log_file(tmp_path, date(2024, 3, 14), TODAY).name == "crypto-mcp.log.2024-03-14"


class TestAnalyzeLogs:
    """Test reading and filtering log files."""

    def test_unfiltered_today(self, log_dir):
        result = analyze_logs(LogQuery(), log_dir, TODAY)

        assert result["date"] == "2024-03-15"
        assert result["records"] == 5
        assert result["content"] == LOG_TEXT

    def test_yesterday(self, log_dir):
        result = analyze_logs(LogQuery(date="yesterday"), log_dir, TODAY)

        assert result["file"].endswith("crypto-mcp.log.2024-03-14")
        assert "Server crashed" in result["content"]

    def test_search_is_case_insensitive(self, log_dir):
        result = analyze_logs(LogQuery(search="REQUESTTIMEOUT"), log_dir, TODAY)

        assert result["records"] == 1
        assert result["content"].startswith("2024-03-15 10:00:03")

    def test_minimum_level(self, log_dir):
        result = analyze_logs(LogQuery(level="WARNING"), log_dir, TODAY)

        assert result["records"] == 2
        assert "DEBUG" not in result["content"]
        assert "Traceback" in result["content"]

    def test_tail(self, log_dir):
        result = analyze_logs(LogQuery(tail=2), log_dir, TODAY)

        assert result["records"] == 2
        assert result["content"].endswith("Fetched prices on binance for BTC/USDT")

    def test_no_matches(self, log_dir):
        result = analyze_logs(LogQuery(search="okx"), log_dir, TODAY)

        assert result["records"] == 0
        assert result["content"] == "No matching log entries."

    def test_missing_file(self, log_dir):
        with pytest.raises(ToolError, match="No log file found for date: 2024-03-01"):
            analyze_logs(LogQuery(date="2024-03-01"), log_dir, TODAY)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ToolError, match="Log directory not found"):
            analyze_logs(LogQuery(), tmp_path / "missing", TODAY)
