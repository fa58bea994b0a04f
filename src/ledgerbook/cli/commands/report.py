"""Financial report commands."""

import click
from ledgerbook.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error, require_access
from ledgerbook.cli.output import money
from ledgerbook.domain.access import Section
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.reporting import ReportingService, opening_balance
from ledgerbook.utils.account_resolver import resolve_account
from ledgerbook.utils.date_parser import get_date_range

WIDTH = 72


@click.group()
def report_group():
    """Income statement, balance sheet, ledgers and depreciation schedule."""
    pass


def date_range_options(func):
    func = period_options(func)
    func = click.option("--end-date", help="Period end (default today)")(func)
    func = click.option("--start-date", help="Period start (default start of this year)")(func)
    return func


def _resolve_period(ctx, start_date, end_date, kwargs):
    return resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
        default_range=get_date_range("this-year"),
    )


def _echo_lines(title, lines, total_label, total) -> None:
    click.echo(f"\n{title}")
    for line in lines:
        click.echo(f"  {line.code:8s} {line.name[:40]:40s} {money(line.amount):>20s}")
    click.echo(f"  {total_label:49s} {money(total):>20s}")


def _service(ctx) -> ReportingService:
    return ReportingService(ctx.obj["db"], ctx.obj["config"])


@report_group.command("income")
@date_range_options
@click.pass_context
def income(ctx, start_date, end_date, **kwargs):
    """Income statement for a period."""
    require_access(ctx, Section.REPORTS)
    start, end = _resolve_period(ctx, start_date, end_date, kwargs)
    try:
        statement = _service(ctx).income_statement(start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nIncome Statement {start} to {end}")
    click.echo("=" * WIDTH)
    _echo_lines("Revenue", statement.revenues, "Total revenue", statement.total_revenue)
    _echo_lines("Expenses", statement.expenses, "Total expenses", statement.total_expense)
    click.echo("-" * WIDTH)
    click.echo(f"  {'Net income':49s} {money(statement.net_income):>20s}")


@report_group.command("balance")
@date_range_options
@click.pass_context
def balance(ctx, start_date, end_date, **kwargs):
    """Balance sheet as of the period end."""
    require_access(ctx, Section.REPORTS)
    start, end = _resolve_period(ctx, start_date, end_date, kwargs)
    try:
        sheet = _service(ctx).balance_sheet(start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBalance Sheet as of {end}")
    click.echo("=" * WIDTH)
    _echo_lines("Assets", sheet.assets, "Total assets", sheet.total_assets)
    _echo_lines("Liabilities", sheet.liabilities, "Total liabilities", sheet.total_liabilities)
    _echo_lines("Equity", sheet.equity, "Total equity", sheet.total_equity)
    click.echo("-" * WIDTH)
    click.echo(f"  {'Total liabilities and equity':49s} {money(sheet.total_liabilities_and_equity):>20s}")
    if sheet.is_balanced:
        click.echo("\nBalanced.")
    else:
        click.echo(f"\nNOT balanced: difference {money(sheet.difference)}")


@report_group.command("ledger")
@click.argument("account")
@click.option("--start-date", help="Show lines from this date")
@click.option("--end-date", help="Show lines up to this date")
@period_options
@click.option("--search", help="Text to match in description or reference")
@click.pass_context
def ledger(ctx, account, start_date, end_date, search, **kwargs):
    """Ledger of one account with running balances.

    ACCOUNT can be an account code or name.
    """
    require_access(ctx, Section.LEDGER)
    db = ctx.obj["db"]
    try:
        code = resolve_account(AccountService(db), account)
    except ValueError as e:
        handle_domain_error(ctx, e)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )
    result = _service(ctx).account_ledger(code, start_date=start, end_date=end, search=search)

    click.echo(f"\nLedger {result.account.code} {result.account.name}")
    click.echo("=" * 110)
    click.echo(f"{'Opening balance':74s} {money(opening_balance(result)):>20s}")
    for line in result.lines:
        click.echo(
            f"{line.date.isoformat():10s} {(line.reference or '')[:10]:10s} {line.description[:24]:24s} "
            f"{money(line.debit) if line.debit else '':>14s} {money(line.credit) if line.credit else '':>14s} "
            f"{money(line.running_balance):>20s}"
        )
    click.echo(f"{'Current balance':74s} {money(result.account.balance):>20s}")


@report_group.command("depreciation")
@date_range_options
@click.pass_context
def depreciation(ctx, start_date, end_date, **kwargs):
    """Depreciation schedule for a period (daily proration)."""
    require_access(ctx, Section.REPORTS)
    start, end = _resolve_period(ctx, start_date, end_date, kwargs)
    try:
        rows = _service(ctx).depreciation_schedule(start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No depreciable assets.")
        return

    click.echo(f"\nDepreciation Schedule {start} to {end}")
    click.echo("=" * 110)
    click.echo(
        f"{'Asset':24s} {'Cost':>16s} {'Opening':>16s} {'Period':>16s} {'Closing':>16s} {'Book value':>16s}"
    )
    for row in rows:
        click.echo(
            f"{row.asset.name[:24]:24s} {money(row.asset.cost):>16s} {money(row.opening_accumulated):>16s} "
            f"{money(row.period_depreciation):>16s} {money(row.closing_accumulated):>16s} "
            f"{money(row.book_value):>16s}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
