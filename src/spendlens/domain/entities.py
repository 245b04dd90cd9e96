"""Domain model entities for spendlens.

These are pure data classes representing business concepts, independent of
the storage schema and of any presentation layer.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from spendlens.domain.categories import Category


@dataclass(frozen=True)
class Transaction:
    """One normalized financial event.

    Positive amounts are inflows, negative amounts are outflows.
    """

    id: str
    date: date
    description: str
    amount: float
    category: Category
    original_category: Category
    merchant: Optional[str] = None
    balance: Optional[float] = None
    user_modified: bool = False


@dataclass(frozen=True)
class ColumnMapping:
    """Resolved source header name for each semantic column."""

    date: str
    amount: str
    description: str
    balance: Optional[str] = None


@dataclass(frozen=True)
class CSVTable:
    """Tokenized CSV file: trimmed headers plus one dict per data row."""

    headers: tuple[str, ...]
    rows: tuple[dict[str, Optional[str]], ...]
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParsedCSV:
    """Result of ingesting one CSV table."""

    transactions: tuple[Transaction, ...]
    headers: tuple[str, ...]
    errors: tuple[str, ...]
    row_count: int


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total for one category."""

    category: Category
    amount: float
    percentage: float
    count: int
    trend: Optional[float] = None


@dataclass(frozen=True)
class MerchantSpending:
    """Expense total for one merchant."""

    merchant: str
    amount: float
    count: int
    category: Category


@dataclass(frozen=True)
class MonthlyData:
    """Income and expenses for one calendar month ("Jan 2024")."""

    month: str
    income: float
    expenses: float
    net: float


@dataclass(frozen=True)
class DailySpending:
    """Expense total for one ISO calendar day."""

    date: str
    amount: float


@dataclass(frozen=True)
class Insights:
    """Statistical snapshot derived from a full transaction list."""

    total_income: float = 0.0
    total_expenses: float = 0.0
    net_savings: float = 0.0
    savings_rate: float = 0.0
    daily_average: float = 0.0
    burn_rate: float = 0.0
    top_merchants: tuple[MerchantSpending, ...] = ()
    category_breakdown: tuple[CategoryTotal, ...] = ()
    monthly_comparison: tuple[MonthlyData, ...] = ()
    spending_trend: tuple[DailySpending, ...] = ()
    unusual_transactions: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class UserPreferences:
    """User category overrides applied on import.

    merchant_mappings is keyed by lower-cased merchant name and wins over
    category_mappings, whose keywords are matched against the description.
    """

    merchant_mappings: dict[str, Category] = field(default_factory=dict)
    category_mappings: dict[str, Category] = field(default_factory=dict)


@dataclass(frozen=True)
class AIProvider:
    """Configured remote insight generator."""

    name: str
    api_key: str
    model: str = ""


@dataclass(frozen=True)
class AIInsight:
    """Natural-language insight returned by the remote generator."""

    summary: str
    recommendations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
