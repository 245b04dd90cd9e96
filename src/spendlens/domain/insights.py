"""Insights aggregation over a full transaction list.

Every figure is recomputed from scratch on each call. The day span, the
outlier threshold and the burn rate depend on the whole set, so nothing is
cached or updated incrementally.
"""

import statistics
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from spendlens.domain.categories import INCOME_CATEGORIES, Category
from spendlens.domain.entities import (
    CategoryTotal,
    DailySpending,
    Insights,
    MerchantSpending,
    MonthlyData,
    Transaction,
)

TOP_MERCHANT_LIMIT = 5
UNUSUAL_TRANSACTION_LIMIT = 5
OUTLIER_STDDEV_MULTIPLIER = 2
MONTH_KEY_FORMAT = "%b %Y"


def _is_income(txn: Transaction) -> bool:
    return txn.amount > 0 and txn.category in INCOME_CATEGORIES


def calculate_insights(transactions: Sequence[Transaction]) -> Insights:
    """Compute the full insights snapshot for a transaction list.

    Args:
        transactions: Transactions sorted newest first

    Returns:
        Insights; all zeros and empty sequences for an empty list
    """
    if not transactions:
        return Insights()

    expense_txns = [txn for txn in transactions if txn.amount < 0]

    income = sum(txn.amount for txn in transactions if _is_income(txn))
    expenses = sum(abs(txn.amount) for txn in expense_txns)
    net_savings = income - expenses
    savings_rate = (net_savings / income) * 100 if income > 0 else 0.0

    daily_average = expenses / _day_span(transactions)

    current_balance = transactions[0].balance
    if current_balance is None:
        current_balance = net_savings
    burn_rate = current_balance / daily_average if daily_average > 0 else 0.0

    return Insights(
        total_income=income,
        total_expenses=expenses,
        net_savings=net_savings,
        savings_rate=savings_rate,
        daily_average=daily_average,
        burn_rate=burn_rate,
        top_merchants=_top_merchants(expense_txns),
        category_breakdown=_category_breakdown(expense_txns, expenses),
        monthly_comparison=_monthly_comparison(transactions),
        spending_trend=_spending_trend(expense_txns),
        unusual_transactions=find_unusual_transactions(expense_txns),
    )


def _day_span(transactions: Sequence[Transaction]) -> int:
    dates = [txn.date for txn in transactions]
    return max(1, (max(dates) - min(dates)).days)


def _category_breakdown(
    expense_txns: Sequence[Transaction], total_expenses: float
) -> tuple[CategoryTotal, ...]:
    totals: dict[Category, dict] = {}
    for txn in expense_txns:
        entry = totals.setdefault(txn.category, {"amount": 0.0, "count": 0})
        entry["amount"] += abs(txn.amount)
        entry["count"] += 1

    breakdown = [
        CategoryTotal(
            category=category,
            amount=data["amount"],
            count=data["count"],
            percentage=(data["amount"] / total_expenses) * 100 if total_expenses > 0 else 0.0,
        )
        for category, data in totals.items()
    ]
    breakdown.sort(key=lambda total: total.amount, reverse=True)
    return tuple(breakdown)


def _top_merchants(expense_txns: Sequence[Transaction]) -> tuple[MerchantSpending, ...]:
    merchants: dict[str, dict] = {}
    for txn in expense_txns:
        if not txn.merchant:
            continue
        entry = merchants.setdefault(txn.merchant, {"amount": 0.0, "count": 0})
        entry["amount"] += abs(txn.amount)
        entry["count"] += 1
        # Last one seen wins
        entry["category"] = txn.category

    ranked = [
        MerchantSpending(
            merchant=merchant,
            amount=data["amount"],
            count=data["count"],
            category=data["category"],
        )
        for merchant, data in merchants.items()
    ]
    ranked.sort(key=lambda spending: spending.amount, reverse=True)
    return tuple(ranked[:TOP_MERCHANT_LIMIT])


def find_unusual_transactions(
    expense_txns: Sequence[Transaction],
) -> tuple[Transaction, ...]:
    """Return expenses larger than mean + 2 population standard deviations.

    The threshold is computed once over all expenses, not per category. At
    most the first five outliers in input order are returned.
    """
    amounts = [abs(txn.amount) for txn in expense_txns if txn.amount < 0]
    if not amounts:
        return ()

    mean = statistics.fmean(amounts)
    threshold = mean + OUTLIER_STDDEV_MULTIPLIER * statistics.pstdev(amounts, mean)

    unusual = [
        txn for txn in expense_txns if txn.amount < 0 and abs(txn.amount) > threshold
    ]
    return tuple(unusual[:UNUSUAL_TRANSACTION_LIMIT])


def _monthly_comparison(transactions: Sequence[Transaction]) -> tuple[MonthlyData, ...]:
    months: dict[str, dict] = {}
    for txn in transactions:
        entry = months.setdefault(
            txn.date.strftime(MONTH_KEY_FORMAT), {"income": 0.0, "expenses": 0.0}
        )
        if _is_income(txn):
            entry["income"] += txn.amount
        elif txn.amount < 0:
            entry["expenses"] += abs(txn.amount)

    monthly = [
        MonthlyData(
            month=month,
            income=data["income"],
            expenses=data["expenses"],
            net=data["income"] - data["expenses"],
        )
        for month, data in months.items()
    ]
    monthly.sort(key=lambda data: datetime.strptime(data.month, MONTH_KEY_FORMAT))
    return tuple(monthly)


def _spending_trend(expense_txns: Sequence[Transaction]) -> tuple[DailySpending, ...]:
    days: dict[str, float] = {}
    for txn in expense_txns:
        day = txn.date.isoformat()
        days[day] = days.get(day, 0.0) + abs(txn.amount)

    return tuple(DailySpending(date=day, amount=days[day]) for day in sorted(days))


def get_category_trend(
    transactions: Sequence[Transaction],
    category: Category,
    reference_date: Optional[date] = None,
) -> float:
    """Percent change of a category's expenses versus the previous month.

    Args:
        transactions: Transactions to compare
        category: Category to compare
        reference_date: Any day of the "current" month; defaults to today

    Returns:
        Percent change, or 0.0 when the previous month had no expenses
    """
    reference_date = reference_date or date.today()
    current_start = reference_date.replace(day=1)
    previous_start = current_start - relativedelta(months=1)
    next_start = current_start + relativedelta(months=1)

    def month_total(start: date, end: date) -> float:
        return sum(
            abs(txn.amount)
            for txn in transactions
            if txn.category == category and txn.amount < 0 and start <= txn.date < end
        )

    current_total = month_total(current_start, next_start)
    previous_total = month_total(previous_start, current_start)

    if previous_total == 0:
        return 0.0
    return ((current_total - previous_total) / previous_total) * 100


def with_category_trends(
    insights: Insights,
    transactions: Sequence[Transaction],
    reference_date: Optional[date] = None,
) -> Insights:
    """Return a copy of insights whose category breakdown carries trends."""
    breakdown = tuple(
        replace(
            total,
            trend=get_category_trend(transactions, total.category, reference_date),
        )
        for total in insights.category_breakdown
    )
    return replace(insights, category_breakdown=breakdown)
