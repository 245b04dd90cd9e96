"""Shared pytest fixtures for spendlens tests."""

import tempfile
import os
import uuid
from datetime import date
from pathlib import Path
import pytest

from spendlens.database.factories import create_sqlite_database
from spendlens.domain.categories import Category
from spendlens.domain.csv_import import CSVImportService
from spendlens.domain.entities import Transaction
from spendlens.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def make_transaction():
    """Return a factory for Transaction entities with sensible defaults."""

    def _make(
        amount: float,
        txn_date: date = date(2024, 1, 15),
        description: str = "TEST MERCHANT",
        category: Category = Category.OTHER,
        merchant: str | None = "TEST MERCHANT",
        balance: float | None = None,
    ) -> Transaction:
        return Transaction(
            id=str(uuid.uuid4()),
            date=txn_date,
            description=description,
            amount=amount,
            category=category,
            original_category=category,
            merchant=merchant,
            balance=balance,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
