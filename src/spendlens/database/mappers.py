"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the storage schema can change
without touching the domain entities.
"""

from spendlens.domain import entities as domain
from spendlens.domain.categories import Category
from spendlens.database.models import (
    AIProviderSetting as ORMAIProviderSetting,
    Transaction as ORMTransaction,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        category=Category(orm_transaction.category),
        original_category=Category(orm_transaction.original_category),
        merchant=orm_transaction.merchant,
        balance=orm_transaction.balance,
        user_modified=orm_transaction.user_modified,
    )


def transaction_to_orm(txn: domain.Transaction, position: int) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy Transaction model."""
    return ORMTransaction(
        id=txn.id,
        date=txn.date,
        description=txn.description,
        amount=txn.amount,
        category=txn.category.value,
        original_category=txn.original_category.value,
        merchant=txn.merchant,
        balance=txn.balance,
        user_modified=txn.user_modified,
        position=position,
    )


def ai_provider_to_domain(orm_provider: ORMAIProviderSetting) -> domain.AIProvider:
    """Convert SQLAlchemy AIProviderSetting model to domain AIProvider entity."""
    return domain.AIProvider(
        name=orm_provider.name,
        api_key=orm_provider.api_key,
        model=orm_provider.model or "",
    )
