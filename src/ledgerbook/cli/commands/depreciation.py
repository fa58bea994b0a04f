"""Depreciation run commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error, require_access, require_write
from ledgerbook.cli.output import money
from ledgerbook.cli.services import journal_service
from ledgerbook.domain.access import Section
from ledgerbook.domain import DepreciationRunService
from ledgerbook.utils.date_parser import parse_date


@click.group()
def depreciation_group():
    """Calculate and post fixed asset depreciation."""
    pass


def _run_service(ctx) -> DepreciationRunService:
    return DepreciationRunService(ctx.obj["db"], journal_service(ctx), ctx.obj["config"])


def _parse_as_of(ctx, as_of: str):
    try:
        return parse_date(as_of)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _echo_items(items) -> None:
    click.echo(f"\n{'Asset':32s} {'Book value':>18s} {'Depreciation':>18s}")
    click.echo("-" * 70)
    for item in items:
        click.echo(
            f"{item.asset.name[:32]:32s} {money(item.asset.book_value):>18s} {money(item.amount):>18s}"
        )
    total = sum(item.amount for item in items)
    click.echo("-" * 70)
    click.echo(f"{'Total':32s} {'':>18s} {money(total):>18s}")


@depreciation_group.command("preview")
@click.option("--as-of", default="today", show_default=True, help="Calculate depreciation up to this date")
@click.pass_context
def preview(ctx, as_of: str):
    """Show the depreciation each asset owes, without posting anything."""
    require_access(ctx, Section.ASSETS)
    items = _run_service(ctx).preview(_parse_as_of(ctx, as_of))
    if not items:
        click.echo("No assets need depreciation up to the selected date.")
        return
    _echo_items(items)


@depreciation_group.command("run")
@click.option("--as-of", default="today", show_default=True, help="Post depreciation up to this date")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def run(ctx, as_of: str, yes: bool):
    """Post one depreciation transaction and update the assets.

    Debits the depreciation expense account and credits accumulated
    depreciation for the total owed by all assets.
    """
    require_write(ctx, Section.ASSETS)
    service = _run_service(ctx)
    as_of_date = _parse_as_of(ctx, as_of)

    items = service.preview(as_of_date)
    if not items:
        click.echo("No assets need depreciation up to the selected date.")
        return

    _echo_items(items)
    if not yes and not click.confirm("\nPost this depreciation?"):
        click.echo("Depreciation cancelled.")
        return

    try:
        txn = service.commit(as_of_date, items)
        click.echo(f"Posted depreciation transaction {txn.id} ({money(txn.total_debit)})")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register depreciation commands with main CLI."""
    cli.add_command(depreciation_group, name="depreciation")
