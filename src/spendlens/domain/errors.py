"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class InsightGenerationError(DomainError):
    """The remote insight generator failed or returned an unusable reply."""


def missing_required_columns() -> str:
    """Return message for a header row without date, amount and description."""
    return (
        "Could not detect required columns (date, amount, description). "
        "Please ensure your CSV has these fields."
    )


def missing_required_fields(row_num: int) -> str:
    """Return message for a row with an empty date, amount or description."""
    return f"Row {row_num}: Missing required fields"


def invalid_date(row_num: int, value: str) -> str:
    """Return message for a row whose date cannot be parsed."""
    return f"Row {row_num}: Invalid date format: {value}"


def invalid_amount(row_num: int, value: str) -> str:
    """Return message for a row whose amount cannot be parsed."""
    return f"Row {row_num}: Invalid amount: {value}"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def ambiguous_transaction_id(prefix: str, match_count: int) -> str:
    """Return message for an ID prefix matching several transactions."""
    return f"Transaction ID '{prefix}' is ambiguous ({match_count} matches)"


def unknown_category(value: str) -> str:
    """Return message for a category outside the fixed set."""
    return f"Unknown category '{value}'"
