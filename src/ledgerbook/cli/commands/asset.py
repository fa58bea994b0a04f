"""Fixed asset commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error, require_access, require_write
from ledgerbook.cli.output import money
from ledgerbook.cli.services import asset_service
from ledgerbook.domain.access import Section
from ledgerbook.domain.entities import DepreciationMethod
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date

METHODS = [m.value for m in DepreciationMethod]


@click.group()
def asset_group():
    """Manage the fixed asset register."""
    pass


@asset_group.command("create")
@click.argument("name")
@click.option("--cost", required=True, help="Acquisition cost")
@click.option("--date", "date_str", default="today", show_default=True, help="Acquisition date")
@click.option("--category", default="", help="Asset category")
@click.option("--depreciable/--not-depreciable", default=False, help="Whether the asset is depreciated")
@click.option("--life", type=int, help="Useful life in years (required for depreciable assets)")
@click.option("--residual", default="0", help="Residual value (default 0)")
@click.option("--method", type=click.Choice(METHODS), help="Depreciation method (default straight-line)")
@click.option("--accumulated", default="0", help="Depreciation already booked before registration")
@click.pass_context
def create_asset(ctx, name, cost, date_str, category, depreciable, life, residual, method, accumulated):
    """Register a fixed asset.

    Examples:
        ledgerbook asset create "Delivery van" --cost 240000000 --date 2024-01-01 --depreciable --life 8
        ledgerbook asset create "Office desk" --cost 3500000 --category Furniture
    """
    require_write(ctx, Section.ASSETS)
    service = asset_service(ctx)

    try:
        asset = service.create_asset(
            name=name,
            cost=parse_amount(cost),
            date=parse_date(date_str),
            category=category,
            is_depreciable=depreciable,
            life=life,
            residual=parse_amount(residual),
            method=method,
            accumulated_depreciation=parse_amount(accumulated),
        )
        click.echo(f"Created asset {asset.id} '{asset.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@asset_group.command("list")
@click.pass_context
def list_assets(ctx):
    """List assets with cost, accumulated depreciation and book value."""
    require_access(ctx, Section.ASSETS)
    assets = asset_service(ctx).list_assets()
    if not assets:
        click.echo("No assets found.")
        return

    click.echo(
        f"\n{'ID':20s} {'Name':24s} {'Acquired':10s} {'Cost':>16s} {'Accumulated':>16s} {'Book value':>16s}"
    )
    click.echo("-" * 107)
    for asset in assets:
        marker = "" if asset.is_depreciable else " *"
        click.echo(
            f"{asset.id:20s} {(asset.name + marker)[:24]:24s} {asset.date.isoformat():10s} "
            f"{money(asset.cost):>16s} {money(asset.accumulated_depreciation):>16s} "
            f"{money(asset.book_value):>16s}"
        )
    if any(not a.is_depreciable for a in assets):
        click.echo("\n* not depreciated")


@asset_group.command("update")
@click.argument("asset_id")
@click.option("--name", help="New name")
@click.option("--cost", help="New cost")
@click.option("--date", "date_str", help="New acquisition date")
@click.option("--category", help="New category")
@click.option("--depreciable/--not-depreciable", default=None, help="Change depreciation status")
@click.option("--life", type=int, help="New useful life in years")
@click.option("--residual", help="New residual value")
@click.option("--method", type=click.Choice(METHODS), help="New depreciation method")
@click.pass_context
def update_asset(ctx, asset_id, name, cost, date_str, category, depreciable, life, residual, method):
    """Update an asset's fields."""
    require_write(ctx, Section.ASSETS)
    service = asset_service(ctx)

    try:
        changes = {}
        if name is not None:
            changes["name"] = name
        if cost is not None:
            changes["cost"] = parse_amount(cost)
        if date_str is not None:
            changes["date"] = parse_date(date_str)
        if category is not None:
            changes["category"] = category
        if depreciable is not None:
            changes["is_depreciable"] = depreciable
        if life is not None:
            changes["life"] = life
        if residual is not None:
            changes["residual"] = parse_amount(residual)
        if method is not None:
            changes["method"] = method

        asset = service.update_asset(asset_id, **changes)
        click.echo(f"Updated asset {asset.id} '{asset.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@asset_group.command("delete")
@click.argument("asset_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_asset(ctx, asset_id: str, yes: bool):
    """Delete an asset, whatever its remaining book value."""
    require_write(ctx, Section.ASSETS)
    service = asset_service(ctx)

    asset = service.get_asset(asset_id)
    if asset is None:
        click.echo(f"Error: Asset {asset_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete asset '{asset.name}' (book value {money(asset.book_value)})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_asset(asset_id)
        click.echo(f"Deleted asset '{asset.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register asset commands with main CLI."""
    cli.add_command(asset_group, name="asset")
