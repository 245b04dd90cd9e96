"""Conversion of domain entities to and from JSON-compatible dicts.

Dates become ISO-8601 strings and categories their display values, so a
dict produced here survives ``json.dumps``/``json.loads`` and converts back
to an equal entity.
"""

from datetime import date
from typing import Any, Mapping, Optional

from spendlens.domain.categories import Category
from spendlens.domain.entities import (
    AIInsight,
    AIProvider,
    CategoryTotal,
    DailySpending,
    Insights,
    MerchantSpending,
    MonthlyData,
    Transaction,
    UserPreferences,
)
from spendlens.domain.errors import ValidationError


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Convert a Transaction to a JSON-compatible dict."""
    return {
        "id": txn.id,
        "date": txn.date.isoformat(),
        "description": txn.description,
        "amount": txn.amount,
        "category": txn.category.value,
        "merchant": txn.merchant,
        "balance": txn.balance,
        "original_category": txn.original_category.value,
        "user_modified": txn.user_modified,
    }


def transaction_from_dict(data: Mapping[str, Any]) -> Transaction:
    """Build a Transaction from a dict produced by transaction_to_dict.

    Raises:
        ValidationError: If a required key is missing or malformed
    """
    try:
        category = Category.parse(data["category"])
        original = data.get("original_category")
        return Transaction(
            id=str(data["id"]),
            date=date.fromisoformat(str(data["date"])[:10]),
            description=data["description"],
            amount=float(data["amount"]),
            category=category,
            original_category=Category.parse(original) if original else category,
            merchant=data.get("merchant"),
            balance=_optional_float(data.get("balance")),
            user_modified=bool(data.get("user_modified", False)),
        )
    except (KeyError, AttributeError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid transaction data: {e}") from e


def insights_to_dict(insights: Insights) -> dict[str, Any]:
    """Convert an Insights snapshot to a JSON-compatible dict."""
    return {
        "total_income": insights.total_income,
        "total_expenses": insights.total_expenses,
        "net_savings": insights.net_savings,
        "savings_rate": insights.savings_rate,
        "daily_average": insights.daily_average,
        "burn_rate": insights.burn_rate,
        "top_merchants": [
            {
                "merchant": m.merchant,
                "amount": m.amount,
                "count": m.count,
                "category": m.category.value,
            }
            for m in insights.top_merchants
        ],
        "category_breakdown": [
            {
                "category": c.category.value,
                "amount": c.amount,
                "percentage": c.percentage,
                "count": c.count,
                "trend": c.trend,
            }
            for c in insights.category_breakdown
        ],
        "monthly_comparison": [
            {"month": m.month, "income": m.income, "expenses": m.expenses, "net": m.net}
            for m in insights.monthly_comparison
        ],
        "spending_trend": [
            {"date": d.date, "amount": d.amount} for d in insights.spending_trend
        ],
        "unusual_transactions": [
            transaction_to_dict(txn) for txn in insights.unusual_transactions
        ],
    }


def insights_from_dict(data: Mapping[str, Any]) -> Insights:
    """Build an Insights snapshot from a dict produced by insights_to_dict.

    Raises:
        ValidationError: If the data is malformed
    """
    try:
        return Insights(
            total_income=float(data["total_income"]),
            total_expenses=float(data["total_expenses"]),
            net_savings=float(data["net_savings"]),
            savings_rate=float(data["savings_rate"]),
            daily_average=float(data["daily_average"]),
            burn_rate=float(data["burn_rate"]),
            top_merchants=tuple(
                MerchantSpending(
                    merchant=m["merchant"],
                    amount=float(m["amount"]),
                    count=int(m["count"]),
                    category=Category.parse(m["category"]),
                )
                for m in data.get("top_merchants", [])
            ),
            category_breakdown=tuple(
                CategoryTotal(
                    category=Category.parse(c["category"]),
                    amount=float(c["amount"]),
                    percentage=float(c["percentage"]),
                    count=int(c["count"]),
                    trend=_optional_float(c.get("trend")),
                )
                for c in data.get("category_breakdown", [])
            ),
            monthly_comparison=tuple(
                MonthlyData(
                    month=m["month"],
                    income=float(m["income"]),
                    expenses=float(m["expenses"]),
                    net=float(m["net"]),
                )
                for m in data.get("monthly_comparison", [])
            ),
            spending_trend=tuple(
                DailySpending(date=d["date"], amount=float(d["amount"]))
                for d in data.get("spending_trend", [])
            ),
            unusual_transactions=tuple(
                transaction_from_dict(txn) for txn in data.get("unusual_transactions", [])
            ),
        )
    except (KeyError, AttributeError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid insights data: {e}") from e


def preferences_to_dict(preferences: UserPreferences) -> dict[str, Any]:
    """Convert UserPreferences to a JSON-compatible dict."""
    return {
        "merchant_mappings": {
            key: category.value for key, category in preferences.merchant_mappings.items()
        },
        "category_mappings": {
            key: category.value for key, category in preferences.category_mappings.items()
        },
    }


def preferences_from_dict(data: Mapping[str, Any]) -> UserPreferences:
    """Build UserPreferences from a dict produced by preferences_to_dict."""
    try:
        return UserPreferences(
            merchant_mappings={
                str(key).lower(): Category.parse(value)
                for key, value in (data.get("merchant_mappings") or {}).items()
            },
            category_mappings={
                str(key).lower(): Category.parse(value)
                for key, value in (data.get("category_mappings") or {}).items()
            },
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid preferences data: {e}") from e


def ai_provider_to_dict(provider: AIProvider) -> dict[str, Any]:
    """Convert an AIProvider to a JSON-compatible dict."""
    return {"name": provider.name, "api_key": provider.api_key, "model": provider.model}


def ai_provider_from_dict(data: Mapping[str, Any]) -> AIProvider:
    """Build an AIProvider from a dict produced by ai_provider_to_dict."""
    try:
        return AIProvider(
            name=str(data["name"]),
            api_key=str(data["api_key"]),
            model=str(data.get("model") or ""),
        )
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Invalid AI provider data: {e}") from e


def ai_insight_to_dict(insight: AIInsight) -> dict[str, Any]:
    """Convert an AIInsight to a JSON-compatible dict."""
    return {
        "summary": insight.summary,
        "recommendations": list(insight.recommendations),
        "warnings": list(insight.warnings),
        "opportunities": list(insight.opportunities),
    }


def ai_insight_from_dict(data: Any) -> AIInsight:
    """Build an AIInsight from a decoded JSON reply.

    Raises:
        ValidationError: If data doesn't have the summary and the three
            string lists
    """
    if not isinstance(data, Mapping) or not isinstance(data.get("summary"), str):
        raise ValidationError("Insight reply must be an object with a 'summary' string")

    lists = {}
    for key in ("recommendations", "warnings", "opportunities"):
        value = data.get(key, [])
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValidationError(f"Insight reply field '{key}' must be a list of strings")
        lists[key] = tuple(value)

    return AIInsight(summary=data["summary"], **lists)
