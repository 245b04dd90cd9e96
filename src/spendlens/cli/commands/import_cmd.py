"""CSV import commands."""

import click
from spendlens.cli.error_handling import fail, handle_domain_error
from spendlens.domain.column_detection import detect_column_mapping, validate_csv_structure
from spendlens.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--no-user-mappings",
    is_flag=True,
    help="Ignore merchant categories you assigned earlier",
)
@click.option(
    "--append",
    is_flag=True,
    help="Add to the stored transactions instead of replacing them",
)
@click.pass_context
def import_csv(ctx, csv_file: str, no_user_mappings: bool, append: bool):
    """Import transactions from a bank CSV export.

    Date, amount and description columns are detected from the header row.
    """
    db = ctx.obj["db"]
    service = CSVImportService(db)

    try:
        result = service.import_csv(
            csv_file,
            apply_user_mappings=not no_user_mappings,
            replace_existing=not append,
        )
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    # Unrecognized header row: nothing could be read
    if result.row_count > 0 and detect_column_mapping(result.headers) is None:
        fail(ctx, result.errors[0])

    click.echo("\nImport complete:")
    click.echo(f"  Rows read: {result.row_count}")
    click.echo(f"  Imported: {len(result.transactions)} transactions")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


@click.command("columns")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def detect_columns(ctx, csv_file: str):
    """Show which columns of a CSV file would be imported."""
    db = ctx.obj["db"]
    service = CSVImportService(db)

    try:
        headers = service.preview_columns(csv_file)
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Headers: {', '.join(headers) if headers else '(none)'}")
    is_valid, message = validate_csv_structure(headers)
    if not is_valid:
        fail(ctx, message)
    click.echo(message)


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_csv)
    cli.add_command(detect_columns)
