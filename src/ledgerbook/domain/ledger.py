"""Pure ledger rules shared by posting and reporting.

Every balance movement in the system is derived from :func:`signed_effect`,
so the sign convention lives in exactly one place:
``balance == initial_balance + sum(normal_sign(type) * (debit - credit))``.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping

from ledgerbook.domain.entities import Account, AccountType, JournalEntry
from ledgerbook.domain.errors import (
    AccountNotFoundError,
    ValidationError,
    unbalanced_entries,
)

ZERO = Decimal("0")


def signed_effect(account_type: AccountType, debit: Decimal, credit: Decimal) -> Decimal:
    """Return the balance change an entry causes on an account of this type."""
    return account_type.normal_sign() * (debit - credit)


def validate_entries(entries: Iterable[JournalEntry]) -> Decimal:
    """Check the double-entry rules for a set of entries.

    Returns:
        The (equal) debit and credit total

    Raises:
        ValidationError: If fewer than two entries, negative or empty lines,
            or unbalanced totals
    """
    entries = list(entries)
    if len(entries) < 2:
        raise ValidationError("A transaction needs at least two journal entries")

    for index, entry in enumerate(entries, start=1):
        if not entry.account_code:
            raise ValidationError(f"Entry {index}: account code is required")
        if entry.debit < 0 or entry.credit < 0:
            raise ValidationError(f"Entry {index}: debit and credit cannot be negative")
        if entry.debit == 0 and entry.credit == 0:
            raise ValidationError(f"Entry {index}: either debit or credit must be nonzero")

    total_debit = sum((e.debit for e in entries), ZERO)
    total_credit = sum((e.credit for e in entries), ZERO)
    if total_debit != total_credit:
        raise ValidationError(unbalanced_entries(total_debit, total_credit))
    if total_debit <= 0:
        raise ValidationError("Transaction total must be greater than zero")
    return total_debit


def balance_deltas(
    entries: Iterable[JournalEntry],
    accounts: Mapping[str, Account],
    context: str = "balance update",
) -> dict[str, Decimal]:
    """Aggregate the balance change per account code for a set of entries.

    Raises:
        AccountNotFoundError: If an entry references an unknown account
    """
    deltas: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        account = accounts.get(entry.account_code)
        if account is None:
            raise AccountNotFoundError(entry.account_code, context)
        deltas[entry.account_code] += signed_effect(account.type, entry.debit, entry.credit)
    return dict(deltas)


def reverse_deltas(deltas: Mapping[str, Decimal]) -> dict[str, Decimal]:
    """Negate every delta."""
    return {code: -amount for code, amount in deltas.items()}


def merge_deltas(*delta_maps: Mapping[str, Decimal]) -> dict[str, Decimal]:
    """Sum several delta maps into one."""
    merged: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for deltas in delta_maps:
        for code, amount in deltas.items():
            merged[code] += amount
    return dict(merged)


def index_accounts(accounts: Iterable[Account]) -> dict[str, Account]:
    """Map account code to account."""
    return {account.code: account for account in accounts}
