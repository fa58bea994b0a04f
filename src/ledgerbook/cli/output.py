"""Shared CLI output formatting."""

from decimal import Decimal

import click

from ledgerbook.domain.entities import Transaction


def money(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def echo_transaction(txn: Transaction, account_names: dict[str, str]) -> None:
    """Print a transaction header followed by its entries."""
    click.echo(f"\nTransaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Description: {txn.description}")
    if txn.reference:
        click.echo(f"  Reference: {txn.reference}")
    click.echo(f"  {'Account':32s} {'Debit':>18s} {'Credit':>18s}")
    for entry in txn.entries:
        name = account_names.get(entry.account_code, "(deleted account)")
        label = f"{entry.account_code} {name}"[:32]
        debit = money(entry.debit) if entry.debit else ""
        credit = money(entry.credit) if entry.credit else ""
        click.echo(f"  {label:32s} {debit:>18s} {credit:>18s}")
