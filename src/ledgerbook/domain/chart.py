"""Default chart of accounts, settings defaults and fixed account roles."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ledgerbook.domain.entities import AccountType, CompanySettings, TaxSettings


@dataclass(frozen=True)
class LedgerConfig:
    """Account codes that play a fixed role in ledger operations."""

    depreciation_expense_code: str = "5400"
    accumulated_depreciation_code: str = "1600"
    retained_earnings_code: str = "3200"
    # Asset accounts that never represent a fixed asset purchase
    asset_suggestion_exclusions: frozenset[str] = field(
        default_factory=lambda: frozenset({"1100", "1200", "1300", "1400", "1600"})
    )


# (code, name, type, description)
DEFAULT_ACCOUNTS = [
    ("1100", "Cash", AccountType.ASSET, "Cash on hand"),
    ("1200", "Bank", AccountType.ASSET, "Company bank accounts"),
    ("1300", "Accounts Receivable", AccountType.ASSET, "Amounts billed to customers"),
    ("1400", "Inventory", AccountType.ASSET, "Goods held for sale"),
    ("1500", "Equipment", AccountType.ASSET, "Operating equipment"),
    (
        "1600",
        "Accumulated Depreciation - Equipment",
        AccountType.ASSET,
        "Accumulated depreciation of equipment",
    ),
    ("2100", "Accounts Payable", AccountType.LIABILITY, "Amounts owed to suppliers"),
    ("2200", "Bank Loan", AccountType.LIABILITY, "Bank borrowings"),
    ("2300", "Income Tax Payable", AccountType.LIABILITY, "Unpaid corporate income tax"),
    ("3100", "Share Capital", AccountType.EQUITY, "Capital paid in by shareholders"),
    ("3200", "Retained Earnings", AccountType.EQUITY, "Accumulated retained profit"),
    ("4100", "Service Revenue", AccountType.REVENUE, "Revenue from services"),
    ("5100", "Cost of Revenue", AccountType.EXPENSE, "Direct costs of revenue"),
    ("5200", "Salaries Expense", AccountType.EXPENSE, "Employee salaries"),
    ("5300", "Rent Expense", AccountType.EXPENSE, "Premises rent"),
    ("5400", "Depreciation Expense", AccountType.EXPENSE, "Depreciation of fixed assets"),
    ("5500", "Income Tax Expense", AccountType.EXPENSE, "Corporate income tax expense"),
]


def default_company_settings(today: date | None = None) -> CompanySettings:
    """Return company settings used until the user saves their own."""
    today = today or date.today()
    return CompanySettings(
        name="My Company",
        business_type="services",
        currency="IDR",
        tax_year=str(today.year),
        period_start=today,
    )


def default_tax_settings() -> TaxSettings:
    """Return tax settings used until the user saves their own."""
    return TaxSettings(
        enable_income_tax=False,
        corporate_tax_rate=Decimal("25"),
        tax_calculation_basis="income-before-tax",
        minimum_taxable_income=Decimal("0"),
        round_tax_amount=True,
        tax_expense_account="5500",
        tax_payable_account="2300",
        auto_create_tax_entry=False,
    )
