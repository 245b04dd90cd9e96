"""Transaction viewing commands."""

import click
from spendlens.cli.error_handling import handle_domain_error
from spendlens.cli.formatting import format_amount, truncate
from spendlens.domain.categories import Category
from spendlens.domain.errors import DomainError
from spendlens.domain.transaction import SORT_FIELDS, TransactionService
from spendlens.utils.date_parser import parse_date


@click.command("view")
@click.option("--search", help="Text to find in description or merchant")
@click.option("--category", help="Category name (e.g., 'Food & Dining')")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--sort",
    "sort_field",
    type=click.Choice(SORT_FIELDS),
    default="date",
    show_default=True,
    help="Sort field (amount sorts by magnitude)",
)
@click.option("--asc", is_flag=True, help="Sort ascending instead of descending")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields of each transaction")
@click.pass_context
def view_transactions(
    ctx,
    search: str,
    category: str,
    start_date: str,
    end_date: str,
    sort_field: str,
    asc: bool,
    verbose: bool,
):
    """View transactions with optional filters."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
        transactions = service.list_transactions(
            search=search, category=category, sort_field=sort_field, descending=not asc
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    if start is not None:
        transactions = [txn for txn in transactions if txn.date >= start]
    if end is not None:
        transactions = [txn for txn in transactions if txn.date <= end]

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")

    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date.isoformat()}")
            click.echo(f"  Amount: {format_amount(txn.amount)}")
            click.echo(f"  Description: {txn.description}")
            if txn.merchant:
                click.echo(f"  Merchant: {txn.merchant}")
            click.echo(f"  Category: {txn.category.value}")
            if txn.category != txn.original_category:
                click.echo(f"  Original category: {txn.original_category.value}")
            if txn.user_modified:
                click.echo("  Modified by you: yes")
            if txn.balance is not None:
                click.echo(f"  Balance: {format_amount(txn.balance)}")
            click.echo("-" * 100)
        return

    click.echo("-" * 100)
    click.echo(
        f"{'ID':<10} {'Date':<12} {'Amount':>12}  {'Category':<18} {'Merchant':<44}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        marker = "*" if txn.user_modified else ""
        click.echo(
            f"{txn.id[:8]:<10} {txn.date.isoformat():<12} {format_amount(txn.amount):>12}  "
            f"{txn.category.value + marker:<18} {truncate(txn.merchant or txn.description, 44):<44}"
        )


@click.command("categories")
def list_categories():
    """List the categories transactions can be assigned to."""
    for category in Category:
        click.echo(category.value)


def register_commands(cli):
    """Register view commands with main CLI."""
    cli.add_command(view_transactions)
    cli.add_command(list_categories)
