"""Main CLI entry point."""

import click
from spendlens.database.factories import create_sqlite_database
from spendlens.logging_setup import configure_logging

# Import and register all commands at module level
from spendlens.cli.commands import (
    import_cmd,
    view,
    categorize,
    insights,
    ai,
    data,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDLENS_DB_PATH environment variable)",
    envvar="SPENDLENS_DB_PATH",
)
@click.option(
    "--log-level",
    help="Logging level, e.g. INFO or DEBUG (overrides SPENDLENS_LOG_LEVEL)",
    envvar="SPENDLENS_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Spendlens - Bank statement insights.

    Import CSV exports from any bank, let spendlens detect the columns and
    categorize each transaction, then review where the money goes.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
import_cmd.register_commands(cli)
view.register_commands(cli)
categorize.register_commands(cli)
insights.register_commands(cli)
ai.register_commands(cli)
data.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
