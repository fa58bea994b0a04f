"""Dashboard statistics command."""

import click
from ledgerbook.cli.error_handling import require_access
from ledgerbook.domain.access import Section
from ledgerbook.domain import ReportingService, SettingsService


@click.command("stats")
@click.pass_context
def stats(ctx):
    """Show record counts for the ledger."""
    require_access(ctx, Section.DASHBOARD)
    db = ctx.obj["db"]
    counts = ReportingService(db, ctx.obj["config"]).dashboard_stats()
    company = SettingsService(db).get_company_settings()

    click.echo(f"\n{company.name}")
    click.echo("-" * 40)
    click.echo(f"Accounts:     {counts.account_count}")
    click.echo(f"Transactions: {counts.transaction_count}")
    click.echo(f"Assets:       {counts.asset_count}")


def register_commands(cli):
    """Register stats command with main CLI."""
    cli.add_command(stats)
