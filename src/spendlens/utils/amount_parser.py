"""Amount parsing utilities."""

import re
from typing import Optional

# Leading numeric prefix, read the same way a lenient float parse would
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _numeric_prefix(amount_str: str) -> Optional[str]:
    # Remove currency symbols, commas and whitespace
    cleaned = re.sub(r"[$£€¥,\s]", "", amount_str or "")

    # Handle parentheses notation (negative)
    if cleaned.startswith("(") and cleaned.endswith(")"):
        cleaned = "-" + cleaned[1:-1]

    match = _NUMBER_PREFIX.match(cleaned)
    return match.group(0) if match else None


def parse_amount(amount_str: str) -> float:
    """Parse an amount string into a float.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)
    - "€ 1 234" (currency symbols and inner whitespace are dropped)

    Anything that does not start with a number parses as 0.0. Use
    is_zero_amount_literal() to tell a genuine zero from an unreadable value.

    Args:
        amount_str: Amount string

    Returns:
        Float amount
    """
    prefix = _numeric_prefix(amount_str)
    if prefix is None:
        return 0.0
    return float(prefix)


def has_numeric_value(amount_str: str) -> bool:
    """Return True if the amount text starts with a readable number."""
    return _numeric_prefix(amount_str) is not None


def is_zero_amount_literal(amount_str: str) -> bool:
    """Return True if the amount text is literally "0"."""
    return amount_str == "0"
