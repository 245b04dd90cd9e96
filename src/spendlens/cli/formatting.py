"""Shared text formatting for CLI output."""


def format_amount(amount: float) -> str:
    """Format an amount as dollars with a leading minus for outflows."""
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def truncate(text: str, width: int) -> str:
    """Cut text to width, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."
