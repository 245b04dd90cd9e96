"""Integration tests for end-to-end CLI workflows."""

import json

import requests
from spendlens.cli.main import cli
from spendlens.domain.categories import Category


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def _starbucks(temp_db):
    return next(t for t in temp_db.list_transactions() if t.merchant == "STARBUCKS STORE")


def test_full_workflow(cli_runner, temp_db, fixtures_dir, tmp_path):
    """Import → view → categorize → re-import → insights → export → clear → restore."""
    result = _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))
    assert result.exit_code == 0
    assert "Rows read: 5" in result.output
    assert "Imported: 5 transactions" in result.output

    result = _invoke(cli_runner, temp_db, "view")
    assert result.exit_code == 0
    assert "Found 5 transaction(s)" in result.output
    assert "NETFLIX.COM" in result.output

    starbucks = _starbucks(temp_db)
    result = _invoke(cli_runner, temp_db, "categorize", starbucks.id[:8], "entertainment")
    assert result.exit_code == 0
    assert f"Transaction {starbucks.id[:8]} categorized as 'Entertainment'" in result.output
    assert "Future imports from 'STARBUCKS STORE'" in result.output

    # The merchant override is applied to the next import
    result = _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))
    assert result.exit_code == 0
    reimported = _starbucks(temp_db)
    assert reimported.id != starbucks.id
    assert reimported.category == Category.ENTERTAINMENT
    assert reimported.original_category == Category.FOOD_AND_DINING

    result = _invoke(cli_runner, temp_db, "insights")
    assert result.exit_code == 0
    assert "Financial Summary" in result.output
    assert "$2,500.00" in result.output
    assert "Jan 2024" in result.output

    backup_path = tmp_path / "backup.json"
    result = _invoke(cli_runner, temp_db, "export", "-o", str(backup_path))
    assert result.exit_code == 0
    assert len(json.loads(backup_path.read_text())["transactions"]) == 5

    result = _invoke(cli_runner, temp_db, "clear", "--yes")
    assert result.exit_code == 0
    assert "All data cleared" in result.output
    assert temp_db.list_transactions() == []

    result = _invoke(cli_runner, temp_db, "restore", str(backup_path))
    assert result.exit_code == 0
    assert "Restored 5 transactions and 1 merchant mappings" in result.output
    assert _starbucks(temp_db).category == Category.ENTERTAINMENT


def test_import_reports_row_errors(cli_runner, temp_db, fixtures_dir):
    result = _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "bad_rows.csv"))

    assert result.exit_code == 0
    assert "Imported: 2 transactions" in result.output
    assert "Errors: 2" in result.output
    assert "Row 2: Invalid date format: not a date" in result.output
    assert "Row 3: Invalid amount: n/a" in result.output


def test_import_unrecognized_columns_fails(cli_runner, temp_db, fixtures_dir):
    result = _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "no_required_columns.csv"))

    assert result.exit_code == 1
    assert "Could not detect required columns" in result.output


def test_import_append(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))
    result = _invoke(
        cli_runner, temp_db, "import", "--append", str(fixtures_dir / "semicolon.csv")
    )

    assert result.exit_code == 0
    assert len(temp_db.list_transactions()) == 6


def test_columns_command(cli_runner, temp_db, fixtures_dir):
    result = _invoke(cli_runner, temp_db, "columns", str(fixtures_dir / "bad_rows.csv"))

    assert result.exit_code == 0
    assert "Headers: Trans Date, Payee, Debit" in result.output
    assert 'Date: "Trans Date", Amount: "Debit", Description: "Payee"' in result.output


def test_columns_command_unrecognized(cli_runner, temp_db, fixtures_dir):
    result = _invoke(
        cli_runner, temp_db, "columns", str(fixtures_dir / "no_required_columns.csv")
    )

    assert result.exit_code == 1
    assert "Could not detect required columns" in result.output


def test_view_filters(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))

    result = _invoke(cli_runner, temp_db, "view", "--category", "Shopping")
    assert "Found 1 transaction(s)" in result.output
    assert "AMAZON MKTPLACE PMTS" in result.output

    result = _invoke(cli_runner, temp_db, "view", "--search", "shell", "-v")
    assert "Found 1 transaction(s)" in result.output
    assert "Merchant: SHELL OIL 12345678 AUSTIN" in result.output
    assert "Balance: -$500.00" in result.output

    result = _invoke(
        cli_runner, temp_db, "view", "--start-date", "2024-01-16", "--end-date", "2024-01-31"
    )
    assert "Found 2 transaction(s)" in result.output


def test_view_invalid_options(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "view", "--category", "Groceries")
    assert result.exit_code == 1
    assert "Unknown category 'Groceries'" in result.output

    result = _invoke(cli_runner, temp_db, "view", "--start-date", "someday")
    assert result.exit_code == 1


def test_view_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "view")

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_categorize_errors(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))
    starbucks = _starbucks(temp_db)

    result = _invoke(cli_runner, temp_db, "categorize", starbucks.id, "Groceries")
    assert result.exit_code == 1
    assert "Error: Unknown category 'Groceries'" in result.output

    result = _invoke(cli_runner, temp_db, "categorize", "zzzz", "Other")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_categories_command(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "categories")

    assert result.exit_code == 0
    assert result.output.splitlines() == [category.value for category in Category]


def test_insights_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "insights")

    assert result.exit_code == 0
    assert "No transactions found. Import a CSV file first." in result.output


def test_insights_json(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))

    result = _invoke(cli_runner, temp_db, "insights", "--json")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["total_income"] == 2500.0
    assert [m["month"] for m in data["monthly_comparison"]] == ["Jan 2024", "Feb 2024"]


def test_clear_requires_confirmation(cli_runner, temp_db, fixtures_dir):
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))

    result = _invoke(cli_runner, temp_db, "clear", input="n\n")

    assert result.exit_code == 1
    assert len(temp_db.list_transactions()) == 5


def test_restore_invalid_backup(cli_runner, temp_db, tmp_path):
    backup_path = tmp_path / "broken.json"
    backup_path.write_text("{not json")

    result = _invoke(cli_runner, temp_db, "restore", str(backup_path))

    assert result.exit_code == 1
    assert "Backup is not valid JSON" in result.output


def test_ai_configure_and_remove(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "ai", "configure", "--provider", "claude", "--api-key", "bad")
    assert result.exit_code == 1
    assert temp_db.get_ai_provider() is None

    result = _invoke(
        cli_runner, temp_db, "ai", "configure", "--provider", "claude", "--api-key", "sk-ant-abc"
    )
    assert result.exit_code == 0
    assert "Configured claude (claude-3-5-sonnet-20241022)" in result.output
    assert temp_db.get_ai_provider().api_key == "sk-ant-abc"

    result = _invoke(cli_runner, temp_db, "ai", "remove")
    assert result.exit_code == 0
    assert temp_db.get_ai_provider() is None


def test_ai_generate_without_provider(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "ai", "generate")

    assert result.exit_code == 1
    assert "No valid AI provider configured" in result.output


class _Reply:
    def __init__(self, payload):
        self.payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self.payload


def test_ai_generate(cli_runner, temp_db, fixtures_dir, monkeypatch):
    text = json.dumps(
        {
            "summary": "Healthy savings rate.",
            "recommendations": ["Keep it up"],
            "warnings": [],
            "opportunities": [],
        }
    )
    monkeypatch.setattr(
        requests, "post", lambda url, **kwargs: _Reply({"content": [{"text": text}]})
    )
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))
    _invoke(cli_runner, temp_db, "ai", "configure", "--provider", "claude", "--api-key", "sk-ant-abc")

    result = _invoke(cli_runner, temp_db, "ai", "generate")

    assert result.exit_code == 0
    assert "Healthy savings rate." in result.output
    assert "Recommendations:" in result.output
    assert "  - Keep it up" in result.output
    assert "Warnings:" not in result.output


def test_ai_generate_failure(cli_runner, temp_db, fixtures_dir, monkeypatch):
    def fail(url, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "post", fail)
    _invoke(cli_runner, temp_db, "import", str(fixtures_dir / "chase_style.csv"))
    _invoke(cli_runner, temp_db, "ai", "configure", "--provider", "claude", "--api-key", "sk-ant-abc")

    result = _invoke(cli_runner, temp_db, "ai", "generate")

    assert result.exit_code == 1
    assert "Failed to generate insights from Claude" in result.output
