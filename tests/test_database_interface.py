"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from ledgerbook.domain import entities
from ledgerbook.domain.entities import AccountType, JournalEntry, TransactionPayload
from ledgerbook.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    IntegrityError,
    NotFoundError,
)


def _payload(description="Sale", amount="100", txn_date=date(2024, 1, 15)):
    amount = Decimal(amount)
    return TransactionPayload(
        date=txn_date,
        description=description,
        reference="REF-1",
        entries=(
            JournalEntry("1100", debit=amount),
            JournalEntry("4100", credit=amount),
        ),
    )


@pytest.fixture
def chart(temp_db):
    temp_db.create_account(code="1100", name="Cash", type=AccountType.ASSET)
    temp_db.create_account(code="4100", name="Service Revenue", type=AccountType.REVENUE)


class TestAccounts:
    """Tests for account storage."""

    def test_get_account_returns_domain_model(self, temp_db):
        """Test that get_account returns a domain Account entity."""
        temp_db.create_account(
            code="1100", name="Cash", type=AccountType.ASSET, balance=Decimal("12.50")
        )

        account = temp_db.get_account("1100")

        assert isinstance(account, entities.Account)
        assert account.type == AccountType.ASSET
        assert account.balance == Decimal("12.50")
        assert isinstance(account.balance, Decimal)

    def test_duplicate_code(self, temp_db, chart):
        """Test that a second account with the same code is rejected."""
        with pytest.raises(ConflictError):
            temp_db.create_account(code="1100", name="Petty cash", type=AccountType.ASSET)

    def test_adjust_balances_applies_increments(self, temp_db, chart):
        """Test that balance deltas add to stored balances."""
        temp_db.adjust_account_balances({"1100": Decimal("10"), "4100": Decimal("-4")})
        temp_db.adjust_account_balances({"1100": Decimal("5")})

        assert temp_db.get_account("1100").balance == Decimal("15")
        assert temp_db.get_account("4100").balance == Decimal("-4")

    def test_adjust_balances_unknown_code_rolls_back(self, temp_db, chart):
        """Test that a missing account aborts the whole adjustment."""
        with pytest.raises(AccountNotFoundError):
            temp_db.adjust_account_balances({"1100": Decimal("10"), "9999": Decimal("1")})

        assert temp_db.get_account("1100").balance == 0


class TestTransactions:
    """Tests for transaction storage."""

    def test_create_and_get(self, temp_db, chart):
        """Test that transactions round-trip with their entries."""
        temp_db.create_transaction("1001", _payload())

        txn = temp_db.get_transaction("1001")

        assert isinstance(txn, entities.Transaction)
        assert txn.reference == "REF-1"
        assert len(txn.entries) == 2
        assert all(isinstance(e, entities.JournalEntry) for e in txn.entries)
        assert txn.total_debit == Decimal("100")
        assert isinstance(txn.created_at, datetime)

    def test_storing_a_transaction_leaves_balances_alone(self, temp_db, chart):
        """Test that the store does not move balances on its own."""
        temp_db.create_transaction("1001", _payload())
        assert temp_db.get_account("1100").balance == 0

    def test_list_filters_and_order(self, temp_db, chart):
        """Test date and account filters, newest first."""
        temp_db.create_transaction("1", _payload("Old", txn_date=date(2024, 1, 1)))
        temp_db.create_transaction("2", _payload("New", txn_date=date(2024, 3, 1)))

        assert [t.id for t in temp_db.list_transactions()] == ["2", "1"]
        assert [t.id for t in temp_db.list_transactions(start_date=date(2024, 2, 1))] == ["2"]
        assert [t.id for t in temp_db.list_transactions(end_date=date(2024, 2, 1))] == ["1"]
        assert temp_db.list_transactions(account_code="5300") == []

    def test_delete_cascades_to_entries(self, temp_db, chart):
        """Test that deleting a transaction removes it and its entries."""
        temp_db.create_transaction("1001", _payload())
        temp_db.delete_transaction("1001")

        assert temp_db.get_transaction("1001") is None
        assert temp_db.list_transactions(account_code="1100") == []
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction("1001")

    def test_bulk_insert(self, temp_db, chart):
        """Test that bulk insert stores every header with its entries."""
        stored = temp_db.create_bulk_transactions(
            [(str(i), _payload(f"Sale {i}")) for i in range(1, 4)]
        )

        assert len(stored) == 3
        assert temp_db.count_transactions() == 3
        assert all(len(temp_db.get_transaction(t.id).entries) == 2 for t in stored)

    def test_bulk_entry_failure_leaves_headers_and_raises(self, temp_db, chart):
        """Test that failed entry inserts leave headers behind and raise."""
        broken = TransactionPayload(
            date=date(2024, 1, 2),
            description="Broken",
            entries=(
                JournalEntry(None, debit=Decimal("5")),
                JournalEntry("4100", credit=Decimal("5")),
            ),
        )

        with pytest.raises(IntegrityError, match="journal entries failed"):
            temp_db.create_bulk_transactions([("1", _payload()), ("2", broken)])

        assert temp_db.count_transactions() == 2
        assert temp_db.get_transaction("1").entries == ()
        assert temp_db.get_transaction("2").entries == ()


class TestAssetsAndSettings:
    """Tests for assets, settings and counts."""

    def test_asset_round_trip_and_update(self, temp_db):
        """Test asset storage and keyword updates."""
        asset = entities.Asset(
            id="A1",
            name="Printer",
            category="Equipment",
            cost=Decimal("3000000"),
            date=date(2024, 1, 2),
            is_depreciable=True,
            life=3,
            method=entities.DepreciationMethod.STRAIGHT_LINE,
        )
        temp_db.create_asset(asset)

        updated = temp_db.update_asset(
            "A1",
            accumulated_depreciation=Decimal("1000000"),
            last_depreciation_date=date(2025, 1, 2),
        )

        assert updated.method == entities.DepreciationMethod.STRAIGHT_LINE
        assert updated.accumulated_depreciation == Decimal("1000000")
        assert temp_db.get_asset("A1").last_depreciation_date == date(2025, 1, 2)
        assert temp_db.count_assets() == 1

    def test_update_asset_rejects_unknown_fields(self, temp_db):
        """Test that unknown asset columns are rejected."""
        with pytest.raises(ValueError):
            temp_db.update_asset("A1", colour="red")

    def test_settings_start_empty(self, temp_db):
        """Test that settings are absent until saved."""
        assert temp_db.get_company_settings() is None
        assert temp_db.get_tax_settings() is None

    def test_counts(self, temp_db, chart):
        """Test entity counts."""
        temp_db.create_transaction("1001", _payload())
        assert temp_db.count_accounts() == 2
        assert temp_db.count_transactions() == 1
        assert temp_db.count_assets() == 0
