"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from spendlens.domain.categories import Category
from spendlens.domain.entities import AIProvider, Transaction, UserPreferences


class Database(ABC):
    """Abstract store for the working set of transactions and preferences."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def replace_transactions(self, transactions: list[Transaction]) -> None:
        """Replace the whole working set with the given transactions."""
        pass

    @abstractmethod
    def add_transactions(self, transactions: list[Transaction]) -> None:
        """Add transactions to the working set."""
        pass

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List all transactions, newest first."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def find_transactions_by_id_prefix(self, prefix: str) -> list[Transaction]:
        """Get transactions whose ID starts with prefix."""
        pass

    @abstractmethod
    def update_transaction_category(
        self, transaction_id: str, category: Category, user_modified: bool = True
    ) -> None:
        """Update a transaction's category."""
        pass

    @abstractmethod
    def delete_all_transactions(self) -> None:
        """Delete every transaction."""
        pass

    # Preference operations
    @abstractmethod
    def get_preferences(self) -> UserPreferences:
        """Get the user's merchant and keyword overrides."""
        pass

    @abstractmethod
    def save_preferences(self, preferences: UserPreferences) -> None:
        """Replace the user's merchant and keyword overrides."""
        pass

    @abstractmethod
    def set_merchant_mapping(self, merchant: str, category: Category) -> None:
        """Record a category override for a lower-cased merchant name."""
        pass

    # AI provider operations
    @abstractmethod
    def get_ai_provider(self) -> Optional[AIProvider]:
        """Get the configured AI provider, if any."""
        pass

    @abstractmethod
    def save_ai_provider(self, provider: Optional[AIProvider]) -> None:
        """Store the AI provider, or remove it when provider is None."""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Delete transactions, preferences and the AI provider."""
        pass
