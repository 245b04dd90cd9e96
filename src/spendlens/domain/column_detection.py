"""Heuristic detection of statement columns from arbitrary header names.

Bank exports have no common schema, so each semantic column is located by
trying an ordered list of keywords against the headers. For every keyword
in turn, the first header (in column order) that contains it wins. The
match is a plain case-insensitive substring test with no scoring, which
keeps the result deterministic and easy to explain in error messages.
"""

from typing import Optional, Sequence

from spendlens.domain.entities import ColumnMapping

DATE_KEYWORDS = ("date", "transaction date", "posting date", "trans date", "datetime")
AMOUNT_KEYWORDS = ("amount", "transaction amount", "debit", "credit", "value", "sum")
DESCRIPTION_KEYWORDS = (
    "description",
    "memo",
    "narrative",
    "details",
    "merchant",
    "payee",
    "name",
)
BALANCE_KEYWORDS = ("balance", "running balance", "current balance")


def _find_header(
    headers: Sequence[str], keywords: Sequence[str], exclude: Optional[str] = None
) -> Optional[str]:
    for keyword in keywords:
        for header in headers:
            lowered = header.lower()
            if keyword in lowered and (exclude is None or exclude not in lowered):
                return header
    return None


def detect_date_column(headers: Sequence[str]) -> Optional[str]:
    """Return the header holding transaction dates."""
    return _find_header(headers, DATE_KEYWORDS)


def detect_amount_column(headers: Sequence[str]) -> Optional[str]:
    """Return the header holding amounts, never a balance column."""
    return _find_header(headers, AMOUNT_KEYWORDS, exclude="balance")


def detect_description_column(headers: Sequence[str]) -> Optional[str]:
    """Return the header holding the free-text description."""
    return _find_header(headers, DESCRIPTION_KEYWORDS)


def detect_balance_column(headers: Sequence[str]) -> Optional[str]:
    """Return the header holding the running balance, if any."""
    return _find_header(headers, BALANCE_KEYWORDS)


def detect_column_mapping(headers: Sequence[str]) -> Optional[ColumnMapping]:
    """Map header names to the date, amount, description and balance roles.

    Args:
        headers: Header names in column order

    Returns:
        ColumnMapping, or None if date, amount or description cannot be found
    """
    date_col = detect_date_column(headers)
    amount_col = detect_amount_column(headers)
    description_col = detect_description_column(headers)

    if not date_col or not amount_col or not description_col:
        return None

    return ColumnMapping(
        date=date_col,
        amount=amount_col,
        description=description_col,
        balance=detect_balance_column(headers),
    )


def validate_csv_structure(headers: Sequence[str]) -> tuple[bool, str]:
    """Check whether the headers can be imported.

    Returns:
        Tuple of (is_valid, message). The message names the detected columns
        or explains what is missing.
    """
    mapping = detect_column_mapping(headers)
    if mapping is None:
        return (
            False,
            "Could not detect required columns. Please ensure your CSV has: "
            "Date, Amount, and Description columns.",
        )

    message = (
        f'Detected columns - Date: "{mapping.date}", Amount: "{mapping.amount}", '
        f'Description: "{mapping.description}"'
    )
    if mapping.balance:
        message += f', Balance: "{mapping.balance}"'
    return True, message
