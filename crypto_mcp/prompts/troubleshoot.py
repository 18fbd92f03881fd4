"""
Troubleshoot prompt - Analyze the server logs to diagnose problems.
"""
from .base import logger, validate_choice

PROBLEM_TYPES = ["error", "performance", "api", "general"]
TIME_RANGES = ["today", "yesterday", "recent"]

SEVERITY_CONFIG = {
    "critical": {
        "levels": ["CRITICAL", "ERROR"],
        "focus": "critical issues and system failures",
        "urgency": "immediate attention required",
    },
    "moderate": {
        "levels": ["ERROR", "WARNING"],
        "focus": "errors and important warnings",
        "urgency": "should be addressed soon",
    },
    "low": {
        "levels": ["INFO", "DEBUG"],
        "focus": "general information and debugging",
        "urgency": "informational review",
    },
}

PROBLEM_STEPS = {
    "api": [
        'Search for API-related issues using search="API" or search="HTTP"',
        "Look for connection timeouts, rate limits, or authentication failures",
        "Check for exchange-related errors if trading issues occur",
    ],
    "performance": [
        'Search for performance keywords using search="timeout" or search="slow"',
        "Look for memory or CPU related messages",
        "Check for network latency issues",
    ],
    "error": [
        'Focus on error and critical level logs using level="ERROR"',
        "Use the search filter to find specific error messages",
        "Trace error sequences and their root causes",
    ],
}


def log_analysis_text(problem_type: str | None = None, time_range: str = "today", severity: str = "moderate") -> str:
    if problem_type:
        problem_type = validate_choice("problem_type", problem_type, PROBLEM_TYPES)
    time_range = validate_choice("time_range", time_range, TIME_RANGES)
    severity = validate_choice("severity", severity, list(SEVERITY_CONFIG))
    config = SEVERITY_CONFIG[severity]

    # "recent" has no file of its own, the active log file holds the latest records
    date = "today" if time_range == "recent" else time_range
    minimum_level = config["levels"][-1]
    problem_context = f" focusing on {problem_type} related issues" if problem_type else ""

    text = f"""Please analyze the system logs to help troubleshoot issues{problem_context}.

**Analysis Configuration:**
- Time Range: {time_range}
- Severity: {severity} ({config["urgency"]})
- Focus: {config["focus"]}
- Log Levels: {", ".join(config["levels"])}

**Step-by-Step Analysis Process:**

1. **Initial Log Overview**
   - Use the "analyzeLogs" tool with date="{date}"{' and tail=200' if time_range == "recent" else ''} to get an overview
   - Identify the number of log entries and any immediate patterns

2. **Level Analysis**
   - Use "analyzeLogs" with date="{date}" and level="{minimum_level}" to keep only the relevant severities
   - Use "analyzeLogs" with search="error" and search="warning" to find recurring messages
   - Look for recurring error patterns and their frequency"""

    steps = PROBLEM_STEPS.get(problem_type or "")
    if steps:
        text += "\n\n3. **Problem-Specific Investigation**\n" + "\n".join(f"   - {step}" for step in steps)

    text += """

**Report:** summarize the root causes you found, how often they occur, and the concrete fixes to apply."""
    return text


def register_troubleshoot_prompts(mcp):
    """Register troubleshooting prompts."""

    @mcp.prompt(name="logAnalysis")
    def log_analysis(problem_type: str | None = None, time_range: str = "today", severity: str = "moderate") -> str:
        """Analyze the server logs to troubleshoot problems.

        Args:
            problem_type: Type of problem to investigate (error, performance, api, general)
            time_range: Time range to analyze (today, yesterday, recent)
            severity: Analysis severity level (critical, moderate, low)
        """
        logger.debug(
            f"Prompt logAnalysis - Input parameters: problem_type={problem_type}, "
            f"time_range={time_range}, severity={severity}"
        )
        return log_analysis_text(problem_type, time_range, severity)
