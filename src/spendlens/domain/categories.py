"""The fixed set of transaction categories."""

from enum import Enum

from spendlens.domain.errors import ValidationError, unknown_category


class Category(str, Enum):
    """Classification label for both spending and income."""

    FOOD_AND_DINING = "Food & Dining"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    INCOME = "Income"
    TRANSFER = "Transfer"
    INVESTMENT = "Investment"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | Category") -> "Category":
        """Resolve a display value (case-insensitive) to a Category.

        Raises:
            ValidationError: If value is not one of the categories
        """
        if isinstance(value, Category):
            return value
        normalized = value.strip().lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        raise ValidationError(unknown_category(value))


# Positive amounts in these categories count as income
INCOME_CATEGORIES = frozenset({Category.INCOME, Category.TRANSFER})
