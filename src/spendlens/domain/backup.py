"""Export and restore of all stored data as JSON."""

import json
from datetime import datetime, UTC
from typing import Optional

from spendlens.database.base import Database
from spendlens.domain.errors import ValidationError
from spendlens.domain.serialization import (
    ai_provider_from_dict,
    ai_provider_to_dict,
    preferences_from_dict,
    preferences_to_dict,
    transaction_from_dict,
    transaction_to_dict,
)
from spendlens.logging_setup import get_logger

logger = get_logger(__name__)


class BackupService:
    """Service for exporting and restoring the working set."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_data(self, now: Optional[datetime] = None) -> str:
        """Export transactions, preferences and AI provider as JSON text."""
        provider = self.db.get_ai_provider()
        payload = {
            "transactions": [transaction_to_dict(txn) for txn in self.db.list_transactions()],
            "preferences": preferences_to_dict(self.db.get_preferences()),
            "ai_provider": ai_provider_to_dict(provider) if provider else None,
            "export_date": (now or datetime.now(UTC)).isoformat(),
        }
        logger.info("Exported %d transactions", len(payload["transactions"]))
        return json.dumps(payload, indent=2)

    def import_data(self, json_string: str) -> dict[str, int]:
        """Restore data previously produced by export_data.

        Each section present in the document replaces what is stored;
        missing sections are left alone. Everything is validated before
        anything is written.

        Returns:
            Dict with the number of restored transactions and merchant mappings

        Raises:
            ValidationError: If the document is not valid JSON or an entry
                is malformed
        """
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Backup is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValidationError("Backup must be a JSON object")

        transactions = None
        if data.get("transactions"):
            if not isinstance(data["transactions"], list):
                raise ValidationError("Backup 'transactions' must be a list")
            transactions = [transaction_from_dict(item) for item in data["transactions"]]
            transactions.sort(key=lambda txn: txn.date, reverse=True)

        preferences = None
        if data.get("preferences"):
            preferences = preferences_from_dict(data["preferences"])

        provider = None
        if data.get("ai_provider"):
            provider = ai_provider_from_dict(data["ai_provider"])

        if transactions is not None:
            self.db.replace_transactions(transactions)
        if preferences is not None:
            self.db.save_preferences(preferences)
        if provider is not None:
            self.db.save_ai_provider(provider)

        restored = {
            "transactions": len(transactions) if transactions is not None else 0,
            "merchant_mappings": (
                len(preferences.merchant_mappings) if preferences is not None else 0
            ),
        }
        logger.info("Restored %d transactions", restored["transactions"])
        return restored
