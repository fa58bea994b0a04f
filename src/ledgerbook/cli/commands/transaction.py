"""Journal transaction commands."""

import click
from ledgerbook.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error, require_access, require_write
from ledgerbook.cli.output import echo_transaction, money
from ledgerbook.cli.services import asset_service, journal_service
from ledgerbook.domain.access import Section
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.asset import AssetSuggestionHook
from ledgerbook.domain.entities import JournalEntry
from ledgerbook.utils.account_resolver import resolve_account
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage journal transactions."""
    pass


def _parse_lines(ctx, account_service, lines, side: str) -> list[JournalEntry]:
    entries = []
    for account, amount in lines:
        try:
            code = resolve_account(account_service, account)
            value = parse_amount(amount)
        except ValueError as e:
            handle_domain_error(ctx, e)
        if side == "debit":
            entries.append(JournalEntry(account_code=code, debit=value))
        else:
            entries.append(JournalEntry(account_code=code, credit=value))
    return entries


@transaction_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Transaction date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--description", required=True, help="Transaction description")
@click.option("--reference", help="Reference or document number")
@click.option(
    "--debit",
    nargs=2,
    multiple=True,
    metavar="ACCOUNT AMOUNT",
    help="Debit line: account code or name and amount (repeatable)",
)
@click.option(
    "--credit",
    nargs=2,
    multiple=True,
    metavar="ACCOUNT AMOUNT",
    help="Credit line: account code or name and amount (repeatable)",
)
@click.option(
    "--suggest-assets",
    is_flag=True,
    help="Register a fixed asset for each debit to a non-current asset account",
)
@click.pass_context
def add_transaction(
    ctx,
    date_str: str,
    description: str,
    reference: str | None,
    debit: tuple,
    credit: tuple,
    suggest_assets: bool,
) -> None:
    """Post a balanced journal transaction.

    Total debits must equal total credits.

    Examples:
        ledgerbook transaction add --description "Office rent" --debit 5300 5000000 --credit 1200 5000000
        ledgerbook transaction add --date 2024-03-01 --description "Laptop" --debit 1500 15000000 --credit 2100 15000000 --suggest-assets
    """
    require_write(ctx, Section.TRANSACTIONS)
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = journal_service(ctx)

    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    entries = _parse_lines(ctx, account_service, debit, "debit")
    entries += _parse_lines(ctx, account_service, credit, "credit")

    hooks = []
    if suggest_assets:
        hooks.append(AssetSuggestionHook(asset_service(ctx), ctx.obj["config"]))

    try:
        txn = service.create_transaction(
            date=txn_date,
            description=description,
            entries=entries,
            reference=reference,
            hooks=hooks,
        )
        click.echo(f"Posted transaction {txn.id} ({money(txn.total_debit)})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'start of month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--account", help="Only transactions touching this account (code or name)")
@click.option("--search", help="Text to match in description or reference")
@click.option("--verbose", "-v", is_flag=True, help="Show journal entries of each transaction")
@click.pass_context
def list_transactions(ctx, start_date, end_date, account, search, verbose, **kwargs):
    """List transactions, newest first."""
    require_access(ctx, Section.TRANSACTIONS)
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = journal_service(ctx)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )

    account_code = None
    if account:
        try:
            account_code = resolve_account(account_service, account)
        except ValueError as e:
            handle_domain_error(ctx, e)

    transactions = service.list_transactions(
        start_date=start, end_date=end, account_code=account_code, search=search
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    if verbose:
        names = {acc.code: acc.name for acc in account_service.list_accounts()}
        click.echo(f"\nFound {len(transactions)} transaction(s):")
        click.echo("=" * 80)
        for txn in transactions:
            echo_transaction(txn, names)
        return

    click.echo(f"\n{'ID':20s} {'Date':10s} {'Reference':12s} {'Description':30s} {'Amount':>18s}")
    click.echo("-" * 94)
    for txn in transactions:
        click.echo(
            f"{txn.id:20s} {txn.date.isoformat():10s} {(txn.reference or '')[:12]:12s} "
            f"{txn.description[:30]:30s} {money(txn.total_debit):>18s}"
        )


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str) -> None:
    """Show one transaction with its journal entries."""
    require_access(ctx, Section.TRANSACTIONS)
    db = ctx.obj["db"]
    txn = journal_service(ctx).get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)
    names = {acc.code: acc.name for acc in AccountService(db).list_accounts()}
    echo_transaction(txn, names)


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--date", "date_str", help="New transaction date")
@click.option("--reference", help="New reference")
@click.option("--description", help="New description")
@click.pass_context
def update_transaction(ctx, transaction_id: str, date_str: str | None, reference: str | None, description: str | None) -> None:
    """Update a transaction's date, reference or description.

    Journal entries cannot be edited; delete and re-post the transaction
    to change amounts or accounts.

    Examples:
        ledgerbook transaction update 1718000000000123 --reference INV-204
    """
    require_write(ctx, Section.TRANSACTIONS)

    txn_date = None
    if date_str is not None:
        try:
            txn_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        journal_service(ctx).update_transaction(
            transaction_id, date=txn_date, reference=reference, description=description
        )
        click.echo(f"Updated transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction and reverse its effect on account balances."""
    require_write(ctx, Section.TRANSACTIONS)
    service = journal_service(ctx)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Delete transaction {transaction_id} '{txn.description}' ({money(txn.total_debit)})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
