"""Ledger initialization command."""

import click
from ledgerbook.cli.error_handling import require_write
from ledgerbook.domain.access import Section
from ledgerbook.domain import AccountService, SettingsService


@click.command("init")
@click.pass_context
def init(ctx):
    """Create the default chart of accounts and settings.

    Accounts are only seeded into an empty ledger, and settings that were
    already saved are left alone, so running init twice is harmless.

    Examples:
        ledgerbook init
        ledgerbook --db-path books.db init
    """
    require_write(ctx, Section.SETTINGS)
    db = ctx.obj["db"]
    account_service = AccountService(db)
    settings_service = SettingsService(db)

    created = account_service.seed_default_accounts()
    if created:
        click.echo(f"Created {len(created)} default accounts.")
    else:
        click.echo("Chart of accounts already exists; no accounts created.")

    if db.get_company_settings() is None:
        settings_service.save_company_settings(settings_service.get_company_settings())
        click.echo("Saved default company settings.")
    if db.get_tax_settings() is None:
        settings_service.save_tax_settings(settings_service.get_tax_settings())
        click.echo("Saved default tax settings.")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init)
