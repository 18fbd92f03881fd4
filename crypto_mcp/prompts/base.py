"""
Shared helpers for prompt text builders.
"""
import logging

from crypto_mcp.exceptions import ValidationError

logger = logging.getLogger("crypto-mcp.prompts")


def validate_choice(name: str, value: str, choices: list[str]) -> str:
    """Match ``value`` against the allowed choices ignoring case, returning the canonical choice"""
    for choice in choices:
        if value.strip().lower() == choice.lower():
            return choice
    raise ValidationError(f"Invalid {name} '{value}'. Expected one of: {', '.join(choices)}")


def exchange_hint(exchange: str | None) -> str:
    """Sentence telling the model which exchange to pass to the tools"""
    if exchange:
        return f'Pass exchange="{exchange}" to every tool call.'
    return "Use the default exchange unless the user asks for another one."
