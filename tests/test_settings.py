"""Tests for company and tax settings."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerbook.domain.entities import CompanySettings
from ledgerbook.domain.errors import ValidationError


class TestCompanySettings:
    def test_defaults_until_saved(self, temp_db, settings_service):
        settings = settings_service.get_company_settings()
        assert settings.name == "My Company"
        assert settings.currency == "IDR"
        assert temp_db.get_company_settings() is None

    def test_save_replaces_singleton(self, temp_db, settings_service):
        settings_service.save_company_settings(CompanySettings(name="PT Maju", npwp="01.234"))
        settings_service.save_company_settings(
            CompanySettings(name="PT Maju Jaya", period_start=date(2024, 1, 1))
        )

        stored = temp_db.get_company_settings()
        assert stored.name == "PT Maju Jaya"
        assert stored.npwp == ""
        assert stored.period_start == date(2024, 1, 1)

    def test_update_keeps_other_fields(self, settings_service):
        settings_service.save_company_settings(CompanySettings(name="PT Maju", owner="Sari"))
        updated = settings_service.update_company_settings(phone="021-555")
        assert updated.owner == "Sari"
        assert settings_service.get_company_settings().phone == "021-555"

    def test_name_required(self, settings_service):
        with pytest.raises(ValidationError, match="name"):
            settings_service.update_company_settings(name=" ")

    def test_unknown_field(self, settings_service):
        with pytest.raises(ValidationError, match="Unknown setting"):
            settings_service.update_company_settings(fax="123")


class TestTaxSettings:
    def test_defaults(self, settings_service):
        tax = settings_service.get_tax_settings()
        assert tax.corporate_tax_rate == Decimal("25")
        assert tax.tax_expense_account == "5500"
        assert not tax.enable_income_tax

    def test_update_round_trip(self, settings_service):
        settings_service.update_tax_settings(enable_income_tax=True, corporate_tax_rate=Decimal("22"))
        tax = settings_service.get_tax_settings()
        assert tax.enable_income_tax
        assert tax.corporate_tax_rate == Decimal("22")
        assert tax.round_tax_amount

    @pytest.mark.parametrize(
        "changes",
        [
            {"corporate_tax_rate": Decimal("-1")},
            {"corporate_tax_rate": Decimal("101")},
            {"minimum_taxable_income": Decimal("-5")},
        ],
    )
    def test_out_of_range(self, settings_service, changes):
        with pytest.raises(ValidationError):
            settings_service.update_tax_settings(**changes)

    def test_saving_tax_settings_leaves_ledger_alone(self, temp_db, settings_service, post):
        post(date(2024, 1, 1), "1100", "4100", 1000)
        before = {a.code: a.balance for a in temp_db.list_accounts()}

        settings_service.update_tax_settings(enable_income_tax=True, auto_create_tax_entry=True)

        assert {a.code: a.balance for a in temp_db.list_accounts()} == before
        assert temp_db.count_transactions() == 1
