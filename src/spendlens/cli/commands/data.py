"""Export, restore and clear commands."""

from pathlib import Path

import click
from spendlens.cli.error_handling import handle_domain_error
from spendlens.domain.backup import BackupService
from spendlens.domain.errors import DomainError
from spendlens.domain.transaction import TransactionService


@click.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="File to write (prints to stdout when omitted)",
)
@click.pass_context
def export_data(ctx, output: str | None):
    """Export all transactions and preferences as JSON."""
    service = BackupService(ctx.obj["db"])
    payload = service.export_data()

    if output is None:
        click.echo(payload)
        return

    Path(output).write_text(payload + "\n", encoding="utf-8")
    click.echo(f"Exported data to {output}")


@click.command("restore")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def restore_data(ctx, backup_file: str):
    """Restore data from a JSON file written by `export`."""
    service = BackupService(ctx.obj["db"])

    try:
        restored = service.import_data(Path(backup_file).read_text(encoding="utf-8"))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Restored {restored['transactions']} transactions and "
        f"{restored['merchant_mappings']} merchant mappings"
    )


@click.command("clear")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_data(ctx, yes: bool):
    """Delete all stored transactions, preferences and AI settings."""
    if not yes:
        click.confirm(
            "Are you sure you want to clear all data? This cannot be undone.", abort=True
        )

    TransactionService(ctx.obj["db"]).clear_all()
    click.echo("All data cleared")


def register_commands(cli):
    """Register data commands with main CLI."""
    cli.add_command(export_data)
    cli.add_command(restore_data)
    cli.add_command(clear_data)
