"""CSV ingestion: tokenizing, normalizing and importing statement exports."""

import csv
import io
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Optional, Union

from spendlens.database.base import Database
from spendlens.domain import errors
from spendlens.domain.categories import Category
from spendlens.domain.categorization import (
    categorize_transaction,
    extract_merchant_name,
)
from spendlens.domain.column_detection import detect_column_mapping
from spendlens.domain.entities import CSVTable, ParsedCSV, Transaction
from spendlens.logging_setup import get_logger
from spendlens.utils.amount_parser import (
    has_numeric_value,
    is_zero_amount_literal,
    parse_amount,
)
from spendlens.utils.date_parser import parse_date_string

logger = get_logger(__name__)


def _detect_delimiter(sample: str) -> str:
    try:
        return csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
    except csv.Error:
        return ","


def read_csv_table(source: Union[str, Path, io.TextIOBase]) -> CSVTable:
    """Tokenize a CSV export into trimmed headers and row dicts.

    Blank lines are skipped. Rows with more or fewer fields than the header
    row are kept and reported in the table's errors.

    Args:
        source: Path to a CSV file, or an open text stream

    Returns:
        CSVTable

    Raises:
        FileNotFoundError: If the path doesn't exist
    """
    if isinstance(source, (str, Path)):
        csv_path = Path(source)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {source}")
        text = csv_path.read_text(encoding="utf-8-sig")
    else:
        text = source.read()

    reader = csv.reader(io.StringIO(text), delimiter=_detect_delimiter(text[:1024]))
    records = [record for record in reader if any(cell.strip() for cell in record)]
    if not records:
        return CSVTable(headers=(), rows=())

    headers = tuple(header.strip() for header in records[0])
    rows = []
    table_errors = []
    for row_num, record in enumerate(records[1:], start=1):
        if len(record) < len(headers):
            table_errors.append(
                f"Row {row_num}: Too few fields: expected {len(headers)} fields "
                f"but parsed {len(record)}"
            )
        elif len(record) > len(headers):
            table_errors.append(
                f"Row {row_num}: Too many fields: expected {len(headers)} fields "
                f"but parsed {len(record)}"
            )
        rows.append(
            {
                header: (record[i] if i < len(record) else None)
                for i, header in enumerate(headers)
            }
        )

    return CSVTable(headers=headers, rows=tuple(rows), errors=tuple(table_errors))


def parse_csv(table: CSVTable) -> ParsedCSV:
    """Normalize every row of a tokenized CSV table into transactions.

    Row-level problems are collected in the result's errors and the row is
    skipped. Only a header row without recognizable date, amount and
    description columns prevents any transaction from being produced.

    Args:
        table: Tokenized CSV table

    Returns:
        ParsedCSV with transactions sorted newest first
    """
    table_errors = list(table.errors)
    headers = tuple(header.strip() for header in table.headers)

    if not table.rows:
        return ParsedCSV(
            transactions=(),
            headers=headers,
            errors=("No data found in CSV file",),
            row_count=0,
        )

    mapping = detect_column_mapping(headers)
    if mapping is None:
        return ParsedCSV(
            transactions=(),
            headers=headers,
            errors=(errors.missing_required_columns(),),
            row_count=len(table.rows),
        )

    row_errors = table_errors
    transactions = []

    for row_num, row in enumerate(table.rows, start=1):
        row = {key.strip(): value for key, value in row.items()}
        date_str = (row.get(mapping.date) or "").strip()
        amount_str = (row.get(mapping.amount) or "").strip()
        description = (row.get(mapping.description) or "").strip()

        if not date_str or not amount_str or not description:
            row_errors.append(errors.missing_required_fields(row_num))
            continue

        txn_date = parse_date_string(date_str)
        if txn_date is None:
            row_errors.append(errors.invalid_date(row_num, date_str))
            continue

        amount = parse_amount(amount_str)
        if amount == 0 and not is_zero_amount_literal(amount_str):
            row_errors.append(errors.invalid_amount(row_num, amount_str))
            continue

        category = categorize_transaction(description)
        balance = None
        if mapping.balance:
            balance_str = (row.get(mapping.balance) or "").strip()
            if has_numeric_value(balance_str):
                balance = parse_amount(balance_str)

        transactions.append(
            Transaction(
                id=str(uuid.uuid4()),
                date=txn_date,
                description=description,
                amount=amount,
                category=category,
                original_category=category,
                merchant=extract_merchant_name(description),
                balance=balance,
                user_modified=False,
            )
        )

    transactions.sort(key=lambda txn: txn.date, reverse=True)

    return ParsedCSV(
        transactions=tuple(transactions),
        headers=headers,
        errors=tuple(row_errors),
        row_count=len(table.rows),
    )


def apply_merchant_mappings(
    transactions: tuple[Transaction, ...],
    merchant_mappings: Mapping[str, Category],
    keyword_mappings: Optional[Mapping[str, Category]] = None,
) -> tuple[Transaction, ...]:
    """Re-categorize transactions that match a user override.

    A transaction whose lower-cased, trimmed merchant is a key of
    merchant_mappings gets that category. Otherwise the first keyword in
    keyword_mappings found in the lower-cased description wins. Transactions
    matching neither keep their rule-based category, which always stays in
    original_category.
    """
    if not merchant_mappings and not keyword_mappings:
        return transactions

    updated = []
    for txn in transactions:
        category = merchant_mappings.get((txn.merchant or "").lower().strip())
        if category is None and keyword_mappings:
            description = txn.description.lower()
            for keyword, keyword_category in keyword_mappings.items():
                if keyword and keyword.lower() in description:
                    category = keyword_category
                    break
        if category is not None and category != txn.category:
            txn = replace(txn, category=category)
        updated.append(txn)
    return tuple(updated)


class CSVImportService:
    """Service for importing CSV files into the working set."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_csv(
        self,
        csv_file_path: Union[str, Path],
        apply_user_mappings: bool = True,
        replace_existing: bool = True,
    ) -> ParsedCSV:
        """Import transactions from a CSV file.

        Args:
            csv_file_path: Path to CSV file
            apply_user_mappings: If True, merchants the user re-categorized
                before get the user's category, and keyword overrides apply
                to the remaining transactions
            replace_existing: If True, the import replaces the stored
                working set; otherwise transactions are appended

        Returns:
            ParsedCSV describing what was imported and which rows failed

        Raises:
            FileNotFoundError: If CSV file doesn't exist
        """
        table = read_csv_table(csv_file_path)
        result = parse_csv(table)

        transactions = result.transactions
        if apply_user_mappings and transactions:
            preferences = self.db.get_preferences()
            transactions = apply_merchant_mappings(
                transactions, preferences.merchant_mappings, preferences.category_mappings
            )
            result = replace(result, transactions=transactions)

        if transactions:
            if replace_existing:
                self.db.replace_transactions(list(transactions))
            else:
                self.db.add_transactions(list(transactions))

        logger.info(
            "Imported %d of %d rows from %s (%d errors)",
            len(transactions),
            result.row_count,
            csv_file_path,
            len(result.errors),
        )
        for message in result.errors:
            logger.debug("Import error: %s", message)

        return result

    def preview_columns(self, csv_file_path: Union[str, Path]) -> tuple[str, ...]:
        """Return the trimmed header row of a CSV file."""
        return read_csv_table(csv_file_path).headers
