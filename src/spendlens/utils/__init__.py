"""Utility functions for spendlens."""

from spendlens.utils.date_parser import parse_date, parse_date_string
from spendlens.utils.amount_parser import has_numeric_value, is_zero_amount_literal, parse_amount

__all__ = [
    "parse_date",
    "parse_date_string",
    "parse_amount",
    "has_numeric_value",
    "is_zero_amount_literal",
]
