"""CLI error reporting."""

import click

from spendlens.domain.errors import DomainError


def fail(ctx: click.Context, message: str) -> None:
    """Print message to stderr as an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError | OSError) -> None:
    """Report a failed operation and exit with failure."""
    fail(ctx, str(error))
