"""Chart of accounts commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error, require_access, require_write
from ledgerbook.cli.output import money
from ledgerbook.domain.access import Section
from ledgerbook.domain import AccountService
from ledgerbook.domain.entities import AccountType
from ledgerbook.utils.amount_parser import parse_amount

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    required=True,
    help="Account type",
)
@click.option("--balance", default="0", help="Initial balance (default 0)")
@click.option("--description", help="Account description")
@click.pass_context
def create_account(ctx, code: str, name: str, account_type: str, balance: str, description: str | None):
    """Create a new account.

    Examples:
        ledgerbook account create 1700 "Vehicles" --type asset
        ledgerbook account create 4200 "Interest Income" --type revenue --description "Bank interest"
    """
    require_write(ctx, Section.ACCOUNTS)
    service = AccountService(ctx.obj["db"])

    try:
        opening = parse_amount(balance)
        account = service.create_account(
            code=code,
            name=name,
            type=account_type,
            balance=opening,
            description=description,
        )
        click.echo(f"Created account {account.code} '{account.name}' ({account.type.value})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Show only accounts of this type",
)
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List all accounts with their balances."""
    require_access(ctx, Section.ACCOUNTS)
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if account_type:
        wanted = AccountType.parse(account_type)
        accounts = [a for a in accounts if a.type == wanted]
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        click.echo(f"{acc.code:8s} | {acc.name:36s} | {acc.type.value:9s} | {money(acc.balance):>18s}")


@account_group.command("update")
@click.argument("code", metavar="CODE")
@click.option("--name", help="New account name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option("--description", help="New description")
@click.pass_context
def update_account(ctx, code: str, name: str | None, account_type: str | None, description: str | None) -> None:
    """Update an account's name, type or description.

    Balances cannot be edited; they change only through transactions.

    Examples:
        ledgerbook account update 1500 --name "Office Equipment"
    """
    require_write(ctx, Section.ACCOUNTS)
    service = AccountService(ctx.obj["db"])

    try:
        account = service.update_account(
            code=code, name=name, type=account_type, description=description
        )
        click.echo(f"Updated account {account.code} '{account.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("code", metavar="CODE")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, code: str, yes: bool) -> None:
    """Delete an account.

    Only accounts with a balance of exactly zero can be deleted.

    Examples:
        ledgerbook account delete 1700
    """
    require_write(ctx, Section.ACCOUNTS)
    service = AccountService(ctx.obj["db"])

    account_obj = service.get_account(code)
    if account_obj is None:
        click.echo(f"Error: Account {code} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account {code} '{account_obj.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(code)
        click.echo(f"Deleted account {code} '{account_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
