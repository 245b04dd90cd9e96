"""Transaction domain service."""

from dataclasses import replace
from typing import Optional, Union

from spendlens.database.base import Database
from spendlens.domain.categories import Category
from spendlens.domain.entities import Transaction
from spendlens.domain.errors import (
    NotFoundError,
    ValidationError,
    ambiguous_transaction_id,
    transaction_not_found,
)
from spendlens.logging_setup import get_logger

logger = get_logger(__name__)

SORT_FIELDS = ("date", "amount", "description", "category")


def _sort_key(sort_field: str):
    if sort_field == "date":
        return lambda txn: txn.date
    if sort_field == "amount":
        return lambda txn: abs(txn.amount)
    if sort_field == "description":
        return lambda txn: txn.description.lower()
    if sort_field == "category":
        return lambda txn: txn.category.value
    raise ValidationError(
        f"Unknown sort field '{sort_field}'. Supported fields: {', '.join(SORT_FIELDS)}"
    )


class TransactionService:
    """Service for browsing and re-categorizing stored transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_transactions(
        self,
        search: Optional[str] = None,
        category: Optional[Union[str, Category]] = None,
        sort_field: str = "date",
        descending: bool = True,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            search: Case-insensitive text to find in description or merchant
            category: Only include transactions in this category
            sort_field: One of "date", "amount" (by magnitude), "description",
                "category"
            descending: Sort order

        Returns:
            List of transactions

        Raises:
            ValidationError: If category or sort_field is unknown
        """
        key = _sort_key(sort_field)
        transactions = self.db.list_transactions()

        if search:
            needle = search.lower()
            transactions = [
                txn
                for txn in transactions
                if needle in txn.description.lower()
                or (txn.merchant is not None and needle in txn.merchant.lower())
            ]

        if category is not None:
            wanted = Category.parse(category)
            transactions = [txn for txn in transactions if txn.category == wanted]

        return sorted(transactions, key=key, reverse=descending)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by full ID or unique ID prefix.

        Raises:
            NotFoundError: If no transaction matches
            ValidationError: If the prefix matches more than one transaction
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is not None:
            return txn

        matches = self.db.find_transactions_by_id_prefix(transaction_id)
        if not matches:
            raise NotFoundError(transaction_not_found(transaction_id))
        if len(matches) > 1:
            raise ValidationError(ambiguous_transaction_id(transaction_id, len(matches)))
        return matches[0]

    def update_category(
        self, transaction_id: str, category: Union[str, Category]
    ) -> Transaction:
        """Re-categorize a transaction on the user's behalf.

        The transaction is flagged as user-modified and, when it has a
        merchant, the choice is remembered for that merchant so later
        imports pick it up.

        Args:
            transaction_id: Transaction ID or unique prefix
            category: New category

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the category is unknown
        """
        new_category = Category.parse(category)
        txn = self.get_transaction(transaction_id)

        self.db.update_transaction_category(txn.id, new_category, user_modified=True)
        if txn.merchant:
            self.db.set_merchant_mapping(txn.merchant.lower(), new_category)

        logger.info("Transaction %s re-categorized as %s", txn.id, new_category.value)
        return replace(txn, category=new_category, user_modified=True)

    def clear_all(self) -> None:
        """Delete all stored transactions, preferences and AI settings."""
        self.db.clear_all()
        logger.info("Cleared all stored data")
