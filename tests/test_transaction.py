"""Tests for TransactionService."""

from dataclasses import replace
from datetime import date

import pytest
from spendlens.domain.categories import Category
from spendlens.domain.entities import AIProvider
from spendlens.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def stored(temp_db, make_transaction):
    """Store three transactions and return them newest first."""
    transactions = [
        make_transaction(
            -63.20,
            txn_date=date(2024, 2, 2),
            description="AMAZON MKTPLACE PMTS",
            category=Category.SHOPPING,
            merchant="AMAZON MKTPLACE PMTS",
        ),
        make_transaction(
            -5.75,
            txn_date=date(2024, 1, 15),
            description="STARBUCKS STORE #12345",
            category=Category.FOOD_AND_DINING,
            merchant="STARBUCKS STORE",
        ),
        make_transaction(
            2500.0,
            txn_date=date(2024, 1, 14),
            description="DIRECT DEP PAYROLL",
            category=Category.INCOME,
            merchant=None,
        ),
    ]
    temp_db.replace_transactions(transactions)
    return transactions


def test_list_newest_first(transaction_service, stored):
    transactions = transaction_service.list_transactions()

    assert [txn.id for txn in transactions] == [txn.id for txn in stored]


def test_list_ascending(transaction_service, stored):
    transactions = transaction_service.list_transactions(descending=False)

    assert [txn.id for txn in transactions] == [txn.id for txn in reversed(stored)]


def test_search_matches_description_or_merchant(transaction_service, stored):
    assert [t.id for t in transaction_service.list_transactions(search="payroll")] == [
        stored[2].id
    ]
    assert [t.id for t in transaction_service.list_transactions(search="Store")] == [
        stored[1].id
    ]
    assert transaction_service.list_transactions(search="nothing like this") == []


def test_filter_by_category(transaction_service, stored):
    transactions = transaction_service.list_transactions(category="shopping")

    assert [txn.id for txn in transactions] == [stored[0].id]


def test_filter_by_unknown_category_raises(transaction_service, stored):
    with pytest.raises(ValidationError):
        transaction_service.list_transactions(category="Groceries")


def test_sort_by_amount_uses_magnitude(transaction_service, stored):
    transactions = transaction_service.list_transactions(sort_field="amount")

    assert [txn.amount for txn in transactions] == [2500.0, -63.20, -5.75]


def test_sort_by_description(transaction_service, stored):
    transactions = transaction_service.list_transactions(
        sort_field="description", descending=False
    )

    assert [txn.description for txn in transactions] == [
        "AMAZON MKTPLACE PMTS",
        "DIRECT DEP PAYROLL",
        "STARBUCKS STORE #12345",
    ]


def test_unknown_sort_field_raises(transaction_service, stored):
    with pytest.raises(ValidationError):
        transaction_service.list_transactions(sort_field="merchant")


def test_get_transaction_by_prefix(transaction_service, stored):
    txn = transaction_service.get_transaction(stored[1].id[:8])

    assert txn == stored[1]


def test_get_missing_transaction_raises(transaction_service, stored):
    with pytest.raises(NotFoundError):
        transaction_service.get_transaction("does-not-exist")


def test_ambiguous_prefix_raises(transaction_service, temp_db, make_transaction):
    temp_db.replace_transactions(
        [
            replace(make_transaction(-1.0), id="abc-1"),
            replace(make_transaction(-2.0), id="abc-2"),
        ]
    )

    with pytest.raises(ValidationError, match="ambiguous"):
        transaction_service.get_transaction("abc")


def test_update_category(transaction_service, temp_db, stored):
    updated = transaction_service.update_category(stored[1].id, "Entertainment")

    assert updated.category == Category.ENTERTAINMENT
    assert updated.original_category == Category.FOOD_AND_DINING
    assert updated.user_modified is True
    assert temp_db.get_transaction(stored[1].id) == updated


def test_update_category_remembers_merchant(transaction_service, temp_db, stored):
    transaction_service.update_category(stored[1].id, Category.ENTERTAINMENT)

    mappings = temp_db.get_preferences().merchant_mappings
    assert mappings == {"starbucks store": Category.ENTERTAINMENT}


def test_update_category_without_merchant(transaction_service, temp_db, stored):
    transaction_service.update_category(stored[2].id, Category.TRANSFER)

    assert temp_db.get_preferences().merchant_mappings == {}


def test_update_category_rejects_unknown_category(transaction_service, temp_db, stored):
    with pytest.raises(ValidationError):
        transaction_service.update_category(stored[1].id, "Groceries")

    assert temp_db.get_transaction(stored[1].id).category == Category.FOOD_AND_DINING


def test_clear_all(transaction_service, temp_db, stored):
    temp_db.set_merchant_mapping("starbucks store", Category.OTHER)
    temp_db.save_ai_provider(AIProvider(name="claude", api_key="sk-ant-x"))

    transaction_service.clear_all()

    assert temp_db.list_transactions() == []
    assert temp_db.get_preferences().merchant_mappings == {}
    assert temp_db.get_ai_provider() is None
