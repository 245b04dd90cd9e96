"""Category assignment command."""

import click
from spendlens.cli.error_handling import handle_domain_error
from spendlens.domain.errors import DomainError
from spendlens.domain.transaction import TransactionService


@click.command("categorize")
@click.argument("transaction_id")
@click.argument("category")
@click.pass_context
def categorize_transaction(ctx, transaction_id: str, category: str):
    """Assign a category to a transaction.

    TRANSACTION_ID may be the full ID or any unique prefix shown by `view`.
    The merchant is remembered, so future imports of the same merchant get
    the same category.

    Examples:
        spendlens categorize 3f2a9c1e "Food & Dining"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.update_category(transaction_id, category)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Transaction {txn.id[:8]} categorized as '{txn.category.value}'")
    if txn.merchant:
        click.echo(f"Future imports from '{txn.merchant}' will use this category")


def register_commands(cli):
    """Register categorize command with main CLI."""
    cli.add_command(categorize_transaction)
