"""Domain model entities for ledgerbook.

These are pure data classes representing bookkeeping concepts, independent of
database schema. Services and report builders operate on these snapshots only,
so the ledger rules can be exercised without a database.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(Enum):
    """Closed set of account classes in the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    def normal_sign(self) -> int:
        """Return +1 for debit-normal accounts and -1 for credit-normal ones."""
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return 1
        return -1

    @classmethod
    def parse(cls, value: "str | AccountType") -> "AccountType":
        """Parse an account type from its value or name (case-insensitive)."""
        if isinstance(value, AccountType):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown account type '{value}'. Valid types: {valid}")


class DepreciationMethod(Enum):
    """Depreciation methods an asset may carry."""

    STRAIGHT_LINE = "straight-line"
    # Stored but never computed
    DECLINING_BALANCE = "declining-balance"


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry with its stored balance."""

    code: str
    name: str
    type: AccountType
    balance: Decimal
    description: Optional[str] = None


@dataclass(frozen=True)
class JournalEntry:
    """One debit or credit line of a transaction."""

    account_code: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    id: Optional[int] = None
    transaction_id: Optional[str] = None

    @property
    def net(self) -> Decimal:
        """Debit minus credit."""
        return self.debit - self.credit


@dataclass(frozen=True)
class Transaction:
    """Journal transaction header with its entries."""

    id: str
    date: date
    description: str
    reference: Optional[str] = None
    entries: tuple[JournalEntry, ...] = ()
    created_at: Optional[datetime] = None

    @property
    def total_debit(self) -> Decimal:
        return sum((e.debit for e in self.entries), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((e.credit for e in self.entries), Decimal("0"))

    def entries_for(self, account_code: str) -> tuple[JournalEntry, ...]:
        """Return the entries that reference an account."""
        return tuple(e for e in self.entries if e.account_code == account_code)


@dataclass(frozen=True)
class TransactionPayload:
    """Unsaved transaction: header fields plus entries."""

    date: date
    description: str
    entries: tuple[JournalEntry, ...]
    reference: Optional[str] = None


@dataclass(frozen=True)
class Asset:
    """Fixed asset register entry."""

    id: str
    name: str
    category: str
    cost: Decimal
    date: date
    is_depreciable: bool = False
    life: Optional[int] = None
    residual: Decimal = Decimal("0")
    method: Optional[DepreciationMethod] = None
    accumulated_depreciation: Decimal = Decimal("0")
    last_depreciation_date: Optional[date] = None

    @property
    def depreciable_base(self) -> Decimal:
        return self.cost - self.residual

    @property
    def book_value(self) -> Decimal:
        return self.cost - self.accumulated_depreciation


@dataclass(frozen=True)
class CompanySettings:
    """Company profile singleton."""

    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    npwp: str = ""
    business_type: str = ""
    currency: str = "IDR"
    tax_year: str = ""
    period_start: Optional[date] = None
    website: str = ""
    owner: str = ""
    description: str = ""


@dataclass(frozen=True)
class TaxSettings:
    """Income tax settings singleton. Stored only; never applied to the ledger."""

    enable_income_tax: bool = False
    corporate_tax_rate: Decimal = Decimal("25")
    tax_calculation_basis: str = "income-before-tax"
    minimum_taxable_income: Decimal = Decimal("0")
    round_tax_amount: bool = True
    tax_expense_account: str = "5500"
    tax_payable_account: str = "2300"
    auto_create_tax_entry: bool = False


@dataclass(frozen=True)
class DepreciationItem:
    """Depreciation owed for one asset in a run."""

    asset: Asset
    amount: Decimal


@dataclass(frozen=True)
class ReportLine:
    """One account line of a financial statement."""

    code: str
    name: str
    amount: Decimal


@dataclass(frozen=True)
class IncomeStatement:
    """Income statement for a period."""

    start_date: date
    end_date: date
    revenues: tuple[ReportLine, ...]
    expenses: tuple[ReportLine, ...]
    total_revenue: Decimal
    total_expense: Decimal
    net_income: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet as of the end of a period."""

    start_date: date
    end_date: date
    assets: tuple[ReportLine, ...]
    liabilities: tuple[ReportLine, ...]
    equity: tuple[ReportLine, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    is_balanced: bool

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity

    @property
    def difference(self) -> Decimal:
        return abs(self.total_assets - self.total_liabilities_and_equity)


@dataclass(frozen=True)
class LedgerLine:
    """Ledger row: one transaction's effect on one account."""

    transaction_id: str
    date: date
    description: str
    reference: Optional[str]
    debit: Decimal
    credit: Decimal
    running_balance: Decimal


@dataclass(frozen=True)
class AccountLedger:
    """Ledger view for a single account."""

    account: Account
    lines: tuple[LedgerLine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DepreciationScheduleRow:
    """Per-asset depreciation for a reporting period."""

    asset: Asset
    opening_accumulated: Decimal
    period_depreciation: Decimal
    closing_accumulated: Decimal
    book_value: Decimal


@dataclass(frozen=True)
class DashboardStats:
    """Record counts shown on the dashboard."""

    account_count: int
    transaction_count: int
    asset_count: int
