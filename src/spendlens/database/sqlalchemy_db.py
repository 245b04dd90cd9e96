"""Generic SQLAlchemy database implementation."""

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from spendlens.database.base import Database
from spendlens.database.models import (
    AIProviderSetting,
    CategoryMapping,
    MerchantMapping,
    Transaction,
    create_session_factory,
)
from spendlens.database.mappers import (
    ai_provider_to_domain,
    transaction_to_domain,
    transaction_to_orm,
)
from spendlens.domain.categories import Category
from spendlens.domain.entities import (
    AIProvider as DomainAIProvider,
    Transaction as DomainTransaction,
    UserPreferences,
)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Transaction operations
    def replace_transactions(self, transactions: list[DomainTransaction]) -> None:
        """Replace the whole working set with the given transactions."""
        session = self._get_session()
        session.query(Transaction).delete()
        session.add_all(
            transaction_to_orm(txn, position) for position, txn in enumerate(transactions)
        )
        session.commit()

    def add_transactions(self, transactions: list[DomainTransaction]) -> None:
        """Add transactions to the working set."""
        session = self._get_session()
        start = session.query(func.coalesce(func.max(Transaction.position), -1)).scalar() + 1
        session.add_all(
            transaction_to_orm(txn, start + offset) for offset, txn in enumerate(transactions)
        )
        session.commit()

    def list_transactions(self) -> list[DomainTransaction]:
        """List all transactions, newest first."""
        session = self._get_session()
        transactions = (
            session.query(Transaction)
            .order_by(Transaction.date.desc(), Transaction.position)
            .all()
        )
        return [transaction_to_domain(txn) for txn in transactions]

    def get_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        session = self._get_session()
        txn = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if txn is None:
            return None
        return transaction_to_domain(txn)

    def find_transactions_by_id_prefix(self, prefix: str) -> list[DomainTransaction]:
        """Get transactions whose ID starts with prefix."""
        session = self._get_session()
        transactions = (
            session.query(Transaction)
            .filter(Transaction.id.startswith(prefix, autoescape=True))
            .order_by(Transaction.date.desc(), Transaction.position)
            .all()
        )
        return [transaction_to_domain(txn) for txn in transactions]

    def update_transaction_category(
        self, transaction_id: str, category: Category, user_modified: bool = True
    ) -> None:
        """Update a transaction's category."""
        session = self._get_session()
        txn = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if txn is None:
            raise ValueError(f"Transaction '{transaction_id}' not found")
        txn.category = category.value
        txn.user_modified = user_modified
        session.commit()

    def delete_all_transactions(self) -> None:
        """Delete every transaction."""
        session = self._get_session()
        session.query(Transaction).delete()
        session.commit()

    # Preference operations
    def get_preferences(self) -> UserPreferences:
        """Get the user's merchant and keyword overrides."""
        session = self._get_session()
        return UserPreferences(
            merchant_mappings={
                row.merchant: Category(row.category)
                for row in session.query(MerchantMapping).all()
            },
            category_mappings={
                row.keyword: Category(row.category)
                for row in session.query(CategoryMapping).all()
            },
        )

    def save_preferences(self, preferences: UserPreferences) -> None:
        """Replace the user's merchant and keyword overrides."""
        session = self._get_session()
        session.query(MerchantMapping).delete()
        session.query(CategoryMapping).delete()
        session.add_all(
            MerchantMapping(merchant=merchant, category=category.value)
            for merchant, category in preferences.merchant_mappings.items()
        )
        session.add_all(
            CategoryMapping(keyword=keyword, category=category.value)
            for keyword, category in preferences.category_mappings.items()
        )
        session.commit()

    def set_merchant_mapping(self, merchant: str, category: Category) -> None:
        """Record a category override for a lower-cased merchant name."""
        session = self._get_session()
        session.merge(MerchantMapping(merchant=merchant.lower(), category=category.value))
        session.commit()

    # AI provider operations
    def get_ai_provider(self) -> Optional[DomainAIProvider]:
        """Get the configured AI provider, if any."""
        session = self._get_session()
        provider = session.query(AIProviderSetting).first()
        if provider is None:
            return None
        return ai_provider_to_domain(provider)

    def save_ai_provider(self, provider: Optional[DomainAIProvider]) -> None:
        """Store the AI provider, or remove it when provider is None."""
        session = self._get_session()
        session.query(AIProviderSetting).delete()
        if provider is not None:
            session.add(
                AIProviderSetting(
                    name=provider.name, api_key=provider.api_key, model=provider.model
                )
            )
        session.commit()

    def clear_all(self) -> None:
        """Delete transactions, preferences and the AI provider."""
        session = self._get_session()
        session.query(Transaction).delete()
        session.query(MerchantMapping).delete()
        session.query(CategoryMapping).delete()
        session.query(AIProviderSetting).delete()
        session.commit()
