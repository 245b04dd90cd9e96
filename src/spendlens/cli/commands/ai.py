"""AI insight commands."""

import click
from spendlens.cli.error_handling import fail, handle_domain_error
from spendlens.domain.ai_insights import (
    DEFAULT_MODELS,
    PROVIDERS,
    generate_ai_insights,
    validate_api_key,
)
from spendlens.domain.entities import AIProvider
from spendlens.domain.errors import DomainError
from spendlens.domain.insights import calculate_insights
from spendlens.domain.transaction import TransactionService


@click.group("ai")
def ai_group():
    """Generate natural-language insights with Claude or Gemini."""
    pass


@ai_group.command("configure")
@click.option("--provider", type=click.Choice(PROVIDERS), required=True, help="AI provider")
@click.option("--api-key", required=True, help="API key for the provider")
@click.option("--model", help="Model name (defaults to the provider's default model)")
@click.pass_context
def configure_provider(ctx, provider: str, api_key: str, model: str | None):
    """Store the provider and API key used by `ai generate`."""
    db = ctx.obj["db"]
    ai_provider = AIProvider(
        name=provider, api_key=api_key.strip(), model=model or DEFAULT_MODELS[provider]
    )

    if not validate_api_key(ai_provider):
        fail(ctx, f"API key does not look like a valid {provider} key")

    db.save_ai_provider(ai_provider)
    click.echo(f"Configured {provider} ({ai_provider.model})")


@ai_group.command("remove")
@click.pass_context
def remove_provider(ctx):
    """Forget the configured provider and API key."""
    ctx.obj["db"].save_ai_provider(None)
    click.echo("AI provider removed")


@ai_group.command("generate")
@click.pass_context
def generate(ctx):
    """Ask the configured provider to comment on your finances."""
    db = ctx.obj["db"]
    provider = db.get_ai_provider()
    if provider is None or not validate_api_key(provider):
        fail(ctx, "No valid AI provider configured. Run 'spendlens ai configure' first.")

    transactions = TransactionService(db).list_transactions()
    if not transactions:
        click.echo("No transactions found. Import a CSV file first.")
        return

    try:
        insight = generate_ai_insights(calculate_insights(transactions), provider)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\n{insight.summary}")
    for title, items in (
        ("Recommendations", insight.recommendations),
        ("Warnings", insight.warnings),
        ("Opportunities", insight.opportunities),
    ):
        if items:
            click.echo(f"\n{title}:")
            for item in items:
                click.echo(f"  - {item}")


def register_commands(cli):
    """Register AI commands with main CLI."""
    cli.add_command(ai_group)
