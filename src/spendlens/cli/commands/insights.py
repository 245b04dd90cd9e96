"""Insights summary command."""

import json

import click
from spendlens.cli.formatting import format_amount, truncate
from spendlens.domain.insights import calculate_insights, with_category_trends
from spendlens.domain.serialization import insights_to_dict
from spendlens.domain.transaction import TransactionService


def _display_insights(insights, show_trends: bool) -> None:
    click.echo("\nFinancial Summary")
    click.echo("=" * 60)
    click.echo(f"{'Total income':<30} {format_amount(insights.total_income):>20}")
    click.echo(f"{'Total expenses':<30} {format_amount(insights.total_expenses):>20}")
    click.echo(f"{'Net savings':<30} {format_amount(insights.net_savings):>20}")
    click.echo(f"{'Savings rate':<30} {insights.savings_rate:>19.1f}%")
    click.echo(f"{'Daily average spending':<30} {format_amount(insights.daily_average):>20}")
    click.echo(f"{'Burn rate':<30} {insights.burn_rate:>15.0f} days")

    if insights.category_breakdown:
        click.echo("\nSpending by Category")
        click.echo("-" * 60)
        for total in insights.category_breakdown:
            line = (
                f"{total.category.value:<22} {format_amount(total.amount):>14} "
                f"{total.percentage:>6.1f}% {total.count:>5} txn"
            )
            if show_trends and total.trend is not None:
                line += f"  {total.trend:+.1f}%"
            click.echo(line)

    if insights.top_merchants:
        click.echo("\nTop Merchants")
        click.echo("-" * 60)
        for spending in insights.top_merchants:
            click.echo(
                f"{truncate(spending.merchant, 30):<30} {format_amount(spending.amount):>14} "
                f"{spending.count:>5} txn"
            )

    if insights.monthly_comparison:
        click.echo("\nMonthly Comparison")
        click.echo("-" * 60)
        click.echo(f"{'Month':<10} {'Income':>15} {'Expenses':>15} {'Net':>15}")
        for month in insights.monthly_comparison:
            click.echo(
                f"{month.month:<10} {format_amount(month.income):>15} "
                f"{format_amount(month.expenses):>15} {format_amount(month.net):>15}"
            )

    if insights.unusual_transactions:
        click.echo("\nUnusual Transactions")
        click.echo("-" * 60)
        for txn in insights.unusual_transactions:
            click.echo(
                f"{txn.date.isoformat():<12} {format_amount(txn.amount):>14}  "
                f"{truncate(txn.description, 32)}"
            )


@click.command("insights")
@click.option("--json", "as_json", is_flag=True, help="Print the insights as JSON")
@click.option(
    "--trends",
    is_flag=True,
    help="Add each category's change versus the previous month",
)
@click.pass_context
def show_insights(ctx, as_json: bool, trends: bool):
    """Show totals, breakdowns, trends and unusual transactions."""
    db = ctx.obj["db"]
    transactions = TransactionService(db).list_transactions()

    insights = calculate_insights(transactions)
    if trends:
        insights = with_category_trends(insights, transactions)

    if as_json:
        click.echo(json.dumps(insights_to_dict(insights), indent=2))
        return

    if not transactions:
        click.echo("No transactions found. Import a CSV file first.")
        return

    _display_insights(insights, show_trends=trends)


def register_commands(cli):
    """Register insights command with main CLI."""
    cli.add_command(show_insights)
