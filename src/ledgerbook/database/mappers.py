"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the stored representation
(string account types, nullable method column) never leaks into services.
"""

from decimal import Decimal

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    Asset as ORMAsset,
    CompanySettings as ORMCompanySettings,
    JournalEntry as ORMJournalEntry,
    TaxSettings as ORMTaxSettings,
    Transaction as ORMTransaction,
)


def _money(value) -> Decimal:
    """Normalize a stored numeric value to Decimal."""
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        balance=_money(orm_account.balance),
        description=orm_account.description,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        transaction_id=orm_entry.transaction_id,
        account_code=orm_entry.account_code,
        debit=_money(orm_entry.debit),
        credit=_money(orm_entry.credit),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        reference=orm_transaction.reference,
        entries=tuple(journal_entry_to_domain(e) for e in orm_transaction.entries),
        created_at=orm_transaction.created_at,
    )


def asset_to_domain(orm_asset: ORMAsset) -> domain.Asset:
    """Convert SQLAlchemy Asset model to domain Asset entity."""
    return domain.Asset(
        id=orm_asset.id,
        name=orm_asset.name,
        category=orm_asset.category or "",
        cost=_money(orm_asset.cost),
        date=orm_asset.date,
        is_depreciable=bool(orm_asset.is_depreciable),
        life=orm_asset.life,
        residual=_money(orm_asset.residual),
        method=domain.DepreciationMethod(orm_asset.method) if orm_asset.method else None,
        accumulated_depreciation=_money(orm_asset.accumulated_depreciation),
        last_depreciation_date=orm_asset.last_depreciation_date,
    )


def asset_to_columns(asset: domain.Asset) -> dict:
    """Convert a domain Asset into column values."""
    return {
        "id": asset.id,
        "name": asset.name,
        "category": asset.category,
        "cost": asset.cost,
        "date": asset.date,
        "is_depreciable": asset.is_depreciable,
        "life": asset.life,
        "residual": asset.residual,
        "method": asset.method.value if asset.method else None,
        "accumulated_depreciation": asset.accumulated_depreciation,
        "last_depreciation_date": asset.last_depreciation_date,
    }


def company_settings_to_domain(orm_settings: ORMCompanySettings) -> domain.CompanySettings:
    """Convert SQLAlchemy CompanySettings model to domain entity."""
    return domain.CompanySettings(
        name=orm_settings.name,
        address=orm_settings.address,
        phone=orm_settings.phone,
        email=orm_settings.email,
        npwp=orm_settings.npwp,
        business_type=orm_settings.business_type,
        currency=orm_settings.currency,
        tax_year=orm_settings.tax_year,
        period_start=orm_settings.period_start,
        website=orm_settings.website,
        owner=orm_settings.owner,
        description=orm_settings.description,
    )


def tax_settings_to_domain(orm_settings: ORMTaxSettings) -> domain.TaxSettings:
    """Convert SQLAlchemy TaxSettings model to domain entity."""
    return domain.TaxSettings(
        enable_income_tax=bool(orm_settings.enable_income_tax),
        corporate_tax_rate=_money(orm_settings.corporate_tax_rate),
        tax_calculation_basis=orm_settings.tax_calculation_basis,
        minimum_taxable_income=_money(orm_settings.minimum_taxable_income),
        round_tax_amount=bool(orm_settings.round_tax_amount),
        tax_expense_account=orm_settings.tax_expense_account,
        tax_payable_account=orm_settings.tax_payable_account,
        auto_create_tax_entry=bool(orm_settings.auto_create_tax_entry),
    )
