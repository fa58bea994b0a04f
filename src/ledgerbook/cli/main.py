"""Main CLI entry point."""

import click
from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.access import Role
from ledgerbook.domain.chart import LedgerConfig
from ledgerbook.domain.ids import ID_SCHEMES, create_id_generator
from ledgerbook.logging_config import configure_logging

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    account,
    asset,
    depreciation,
    import_cmd,
    init,
    report,
    settings,
    stats,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=Role.ADMIN.value,
    show_default=True,
    envvar="LEDGERBOOK_ROLE",
    help="Role of the current user; viewers cannot change data",
)
@click.option(
    "--id-scheme",
    type=click.Choice(sorted(ID_SCHEMES), case_sensitive=False),
    default="numeric",
    show_default=True,
    envvar="LEDGERBOOK_ID_SCHEME",
    help="How new transaction and asset ids are generated",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERBOOK_LOG_LEVEL",
    help="Logging level for diagnostic output on stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, role: str, id_scheme: str, log_level: str):
    """Ledgerbook - double-entry bookkeeping for small businesses.

    Keep a chart of accounts, post balanced journal transactions, run
    fixed asset depreciation and produce income statements, balance
    sheets and account ledgers.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    ctx.obj["role"] = Role(role.lower())
    ctx.obj["config"] = LedgerConfig()
    ctx.obj["id_generator"] = create_id_generator(id_scheme)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)
asset.register_commands(cli)
depreciation.register_commands(cli)
report.register_commands(cli)
settings.register_commands(cli)
stats.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
