"""Financial statements and ledgers built from account and transaction snapshots.

The builders are pure functions over explicit snapshots. Amounts follow the
signed convention of :func:`ledgerbook.domain.ledger.signed_effect`, so
revenue, liability and equity lines are credit-positive and asset and
expense lines are debit-positive.
"""

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.chart import LedgerConfig
from ledgerbook.domain.depreciation import schedule_row
from ledgerbook.domain.entities import (
    Account,
    AccountLedger,
    AccountType,
    Asset,
    BalanceSheet,
    DashboardStats,
    DepreciationScheduleRow,
    IncomeStatement,
    LedgerLine,
    ReportLine,
    Transaction,
)
from ledgerbook.domain.errors import AccountNotFoundError, ValidationError
from ledgerbook.domain.ledger import ZERO, index_accounts, signed_effect

BALANCE_TOLERANCE = Decimal("0.01")


def partition_transactions(
    transactions: Iterable[Transaction], start: date, end: date
) -> tuple[list[Transaction], list[Transaction]]:
    """Split transactions into those before ``start`` and those within [start, end].

    Transactions after ``end`` are dropped.
    """
    prior, period = [], []
    for transaction in transactions:
        if transaction.date < start:
            prior.append(transaction)
        elif transaction.date <= end:
            period.append(transaction)
    return prior, period


def compute_changes(
    transactions: Iterable[Transaction], accounts: Sequence[Account]
) -> dict[str, Decimal]:
    """Signed balance change per account code over a set of transactions.

    Entries for accounts that no longer exist are ignored. Every account in
    ``accounts`` has a key, zero if untouched.
    """
    by_code = index_accounts(accounts)
    changes: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for account in accounts:
        changes[account.code] = ZERO
    for transaction in transactions:
        for entry in transaction.entries:
            account = by_code.get(entry.account_code)
            if account is not None:
                changes[account.code] += signed_effect(account.type, entry.debit, entry.credit)
    return dict(changes)


def _lines(accounts: Sequence[Account], account_type: AccountType, amounts: dict[str, Decimal]):
    return tuple(
        ReportLine(code=a.code, name=a.name, amount=amounts.get(a.code, ZERO))
        for a in sorted(accounts, key=lambda a: a.code)
        if a.type == account_type
    )


def _net_income(changes: dict[str, Decimal], accounts: Sequence[Account]) -> Decimal:
    revenue = sum(
        (changes[a.code] for a in accounts if a.type == AccountType.REVENUE), ZERO
    )
    expense = sum(
        (changes[a.code] for a in accounts if a.type == AccountType.EXPENSE), ZERO
    )
    return revenue - expense


def build_income_statement(
    accounts: Sequence[Account],
    transactions: Iterable[Transaction],
    start: date,
    end: date,
) -> IncomeStatement:
    """Revenue and expense activity within [start, end]."""
    _, period = partition_transactions(transactions, start, end)
    changes = compute_changes(period, accounts)

    revenues = _lines(accounts, AccountType.REVENUE, changes)
    expenses = _lines(accounts, AccountType.EXPENSE, changes)
    total_revenue = sum((line.amount for line in revenues), ZERO)
    total_expense = sum((line.amount for line in expenses), ZERO)
    return IncomeStatement(
        start_date=start,
        end_date=end,
        revenues=revenues,
        expenses=expenses,
        total_revenue=total_revenue,
        total_expense=total_expense,
        net_income=total_revenue - total_expense,
    )


def build_balance_sheet(
    accounts: Sequence[Account],
    transactions: Iterable[Transaction],
    start: date,
    end: date,
    retained_earnings_code: str = LedgerConfig.retained_earnings_code,
) -> BalanceSheet:
    """Closing balances as of ``end``, derived from transaction history.

    Revenue and expense accounts are never closed into equity by a posting,
    so the retained-earnings line absorbs the net income of all history
    through ``end`` for display. Stored balances are not touched.
    """
    prior, period = partition_transactions(transactions, start, end)
    opening = compute_changes(prior, accounts)
    change = compute_changes(period, accounts)
    closing = {code: opening[code] + change[code] for code in opening}

    earnings = _net_income(opening, accounts) + _net_income(change, accounts)

    assets = _lines(accounts, AccountType.ASSET, closing)
    liabilities = _lines(accounts, AccountType.LIABILITY, closing)
    equity = list(_lines(accounts, AccountType.EQUITY, closing))

    for index, line in enumerate(equity):
        if line.code == retained_earnings_code:
            equity[index] = ReportLine(line.code, line.name, line.amount + earnings)
            break
    else:
        if earnings != 0:
            equity.append(
                ReportLine(retained_earnings_code, "Retained Earnings (unallocated)", earnings)
            )

    total_assets = sum((line.amount for line in assets), ZERO)
    total_liabilities = sum((line.amount for line in liabilities), ZERO)
    total_equity = sum((line.amount for line in equity), ZERO)
    is_balanced = abs(total_assets - (total_liabilities + total_equity)) < BALANCE_TOLERANCE
    return BalanceSheet(
        start_date=start,
        end_date=end,
        assets=assets,
        liabilities=liabilities,
        equity=tuple(equity),
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        is_balanced=is_balanced,
    )


def _chronological_key(transaction: Transaction):
    return (transaction.date, transaction.created_at or datetime.min, transaction.id)


def build_account_ledger(
    account: Account,
    transactions: Iterable[Transaction],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
) -> AccountLedger:
    """Per-transaction running balance for one account.

    The stored balance is the anchor: transactions are walked newest first
    and each one's effect is backed out to get the balance before it. Date
    and text filters are applied after the running balances are known, so a
    filtered view still shows true balances.

    Returns:
        Ledger with lines in chronological order
    """
    relevant = sorted(
        (t for t in transactions if t.entries_for(account.code)),
        key=_chronological_key,
    )

    lines = []
    running = account.balance
    for transaction in reversed(relevant):
        entries = transaction.entries_for(account.code)
        debit = sum((e.debit for e in entries), ZERO)
        credit = sum((e.credit for e in entries), ZERO)
        lines.append(
            LedgerLine(
                transaction_id=transaction.id,
                date=transaction.date,
                description=transaction.description,
                reference=transaction.reference,
                debit=debit,
                credit=credit,
                running_balance=running,
            )
        )
        running -= signed_effect(account.type, debit, credit)
    lines.reverse()

    if start_date:
        lines = [line for line in lines if line.date >= start_date]
    if end_date:
        lines = [line for line in lines if line.date <= end_date]
    if search:
        needle = search.lower()
        lines = [
            line
            for line in lines
            if needle in line.description.lower()
            or (line.reference and needle in line.reference.lower())
        ]
    return AccountLedger(account=account, lines=tuple(lines))


def opening_balance(ledger: AccountLedger) -> Decimal:
    """Balance before the first line of a ledger."""
    if not ledger.lines:
        return ledger.account.balance
    first = ledger.lines[0]
    return first.running_balance - signed_effect(ledger.account.type, first.debit, first.credit)


def build_depreciation_schedule(
    assets: Iterable[Asset], start: date, end: date
) -> list[DepreciationScheduleRow]:
    """Daily-prorated depreciation of every depreciable asset over [start, end]."""
    rows = (schedule_row(asset, start, end) for asset in assets)
    return [row for row in rows if row is not None]


class ReportingService:
    """Service for financial reports over the stored ledger."""

    def __init__(self, db: Database, config: Optional[LedgerConfig] = None):
        """Initialize reporting service.

        Args:
            db: Database instance
            config: Fixed account roles (retained earnings)
        """
        self.db = db
        self.config = config or LedgerConfig()

    @staticmethod
    def _check_period(start: date, end: date) -> None:
        if start > end:
            raise ValidationError("Start date must be on or before end date")

    def income_statement(self, start: date, end: date) -> IncomeStatement:
        """Income statement for [start, end]."""
        self._check_period(start, end)
        return build_income_statement(
            self.db.list_accounts(), self.db.list_transactions(), start, end
        )

    def balance_sheet(self, start: date, end: date) -> BalanceSheet:
        """Balance sheet as of ``end``."""
        self._check_period(start, end)
        return build_balance_sheet(
            self.db.list_accounts(),
            self.db.list_transactions(),
            start,
            end,
            retained_earnings_code=self.config.retained_earnings_code,
        )

    def account_ledger(
        self,
        account_code: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        search: Optional[str] = None,
    ) -> AccountLedger:
        """Ledger for one account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = self.db.get_account(account_code)
        if account is None:
            raise AccountNotFoundError(account_code)
        transactions = self.db.list_transactions(account_code=account_code)
        return build_account_ledger(account, transactions, start_date, end_date, search)

    def depreciation_schedule(self, start: date, end: date) -> list[DepreciationScheduleRow]:
        """Depreciation schedule for [start, end]."""
        self._check_period(start, end)
        return build_depreciation_schedule(self.db.list_assets(), start, end)

    def dashboard_stats(self) -> DashboardStats:
        """Record counts for the dashboard."""
        return DashboardStats(
            account_count=self.db.count_accounts(),
            transaction_count=self.db.count_transactions(),
            asset_count=self.db.count_assets(),
        )
