"""Tests for the journal engine."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerbook.domain.asset import AssetService, AssetSuggestionHook
from ledgerbook.domain.entities import JournalEntry, TransactionPayload
from ledgerbook.domain.errors import (
    AccountNotFoundError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from ledgerbook.domain.ids import UUIDIdGenerator
from ledgerbook.domain.journal import JournalService


def _balances(temp_db):
    return {acc.code: acc.balance for acc in temp_db.list_accounts()}


class TestCreateTransaction:
    def test_balances_move_by_signed_effect(self, temp_db, journal_service, seeded_accounts):
        before = _balances(temp_db)

        txn = journal_service.create_transaction(
            date=date(2024, 1, 15),
            description="Consulting invoice",
            entries=[
                JournalEntry("1300", debit=Decimal("1000000")),
                JournalEntry("4100", credit=Decimal("1000000")),
            ],
            reference="INV-001",
        )

        after = _balances(temp_db)
        assert after["1300"] - before["1300"] == Decimal("1000000")
        assert after["4100"] - before["4100"] == Decimal("1000000")
        unaffected = set(before) - {"1300", "4100"}
        assert all(after[code] == before[code] for code in unaffected)

        assert txn.reference == "INV-001"
        assert len(txn.entries) == 2
        assert txn.total_debit == txn.total_credit == Decimal("1000000")

    def test_multi_line_transaction(self, temp_db, journal_service, seeded_accounts):
        journal_service.create_transaction(
            date=date(2024, 2, 1),
            description="Payroll",
            entries=[
                JournalEntry("5200", debit=Decimal("8000000")),
                JournalEntry("1200", credit=Decimal("7500000")),
                JournalEntry("2300", credit=Decimal("500000")),
            ],
        )
        balances = _balances(temp_db)
        assert balances["5200"] == Decimal("8000000")
        assert balances["1200"] == Decimal("-7500000")
        assert balances["2300"] == Decimal("500000")

    def test_unbalanced_writes_nothing(self, temp_db, journal_service, seeded_accounts):
        with pytest.raises(ValidationError):
            journal_service.create_transaction(
                date=date(2024, 1, 1),
                description="Broken",
                entries=[
                    JournalEntry("1100", debit=Decimal("100")),
                    JournalEntry("4100", credit=Decimal("90")),
                ],
            )
        assert temp_db.count_transactions() == 0

    def test_unknown_account_writes_nothing(self, temp_db, journal_service, seeded_accounts):
        before = _balances(temp_db)
        with pytest.raises(AccountNotFoundError):
            journal_service.create_transaction(
                date=date(2024, 1, 1),
                description="Typo",
                entries=[
                    JournalEntry("1100", debit=Decimal("100")),
                    JournalEntry("4999", credit=Decimal("100")),
                ],
            )
        assert temp_db.count_transactions() == 0
        assert _balances(temp_db) == before

    def test_description_required(self, journal_service, seeded_accounts):
        with pytest.raises(ValidationError, match="description"):
            journal_service.create_transaction(
                date=date(2024, 1, 1),
                description="  ",
                entries=[
                    JournalEntry("1100", debit=Decimal("1")),
                    JournalEntry("4100", credit=Decimal("1")),
                ],
            )

    def test_uuid_ids(self, temp_db, seeded_accounts):
        service = JournalService(temp_db, id_generator=UUIDIdGenerator())
        txn = service.create_transaction(
            date=date(2024, 1, 1),
            description="Capital",
            entries=[
                JournalEntry("1200", debit=Decimal("50")),
                JournalEntry("3100", credit=Decimal("50")),
            ],
        )
        assert len(txn.id) == 36
        assert temp_db.get_transaction(txn.id) is not None

    def test_storage_failure_removes_orphaned_header(self, temp_db, seeded_accounts, monkeypatch):
        service = JournalService(temp_db)
        original = temp_db.create_transaction

        def store_header_then_fail(transaction_id, payload):
            original(transaction_id, TransactionPayload(
                date=payload.date, description=payload.description, entries=()
            ))
            raise IntegrityError("entries could not be stored")

        monkeypatch.setattr(temp_db, "create_transaction", store_header_then_fail)
        before = _balances(temp_db)

        with pytest.raises(IntegrityError):
            service.create_transaction(
                date=date(2024, 1, 1),
                description="Half written",
                entries=[
                    JournalEntry("1100", debit=Decimal("10")),
                    JournalEntry("4100", credit=Decimal("10")),
                ],
            )

        assert temp_db.count_transactions() == 0
        assert _balances(temp_db) == before

    def test_balance_update_failure_is_logged_and_raised(
        self, temp_db, seeded_accounts, monkeypatch, caplog
    ):
        service = JournalService(temp_db)

        def fail(deltas):
            raise IntegrityError("database is locked")

        monkeypatch.setattr(temp_db, "adjust_account_balances", fail)
        before = _balances(temp_db)

        with pytest.raises(IntegrityError, match="locked"):
            service.create_transaction(
                date=date(2024, 1, 1),
                description="Unreconciled",
                entries=[
                    JournalEntry("1100", debit=Decimal("10")),
                    JournalEntry("4100", credit=Decimal("10")),
                ],
            )

        assert "balance_update_failed" in caplog.text
        # The stored transaction is left for manual reconciliation
        assert temp_db.count_transactions() == 1
        assert _balances(temp_db) == before


class TestHooks:
    def test_failing_hook_does_not_abort_post(self, temp_db, seeded_accounts, caplog):
        def broken_hook(transaction, accounts):
            raise RuntimeError("hook exploded")

        service = JournalService(temp_db, hooks=[broken_hook])
        txn = service.create_transaction(
            date=date(2024, 1, 1),
            description="Still posted",
            entries=[
                JournalEntry("1100", debit=Decimal("10")),
                JournalEntry("4100", credit=Decimal("10")),
            ],
        )
        assert temp_db.get_transaction(txn.id) is not None
        assert "posting_hook_failed" in caplog.text

    def test_asset_suggestion_creates_asset_for_equipment(self, temp_db, seeded_accounts):
        hook = AssetSuggestionHook(AssetService(temp_db))
        service = JournalService(temp_db)

        service.create_transaction(
            date=date(2024, 3, 1),
            description="Laptop",
            entries=[
                JournalEntry("1500", debit=Decimal("15000000")),
                JournalEntry("1200", credit=Decimal("15000000")),
            ],
            hooks=[hook],
        )

        assets = temp_db.list_assets()
        assert len(assets) == 1
        assert assets[0].name == "Laptop"
        assert assets[0].cost == Decimal("15000000")
        assert assets[0].category == "Equipment"
        assert assets[0].date == date(2024, 3, 1)
        assert not assets[0].is_depreciable

    def test_asset_suggestion_skips_excluded_accounts(self, temp_db, seeded_accounts):
        hook = AssetSuggestionHook(AssetService(temp_db))
        service = JournalService(temp_db)

        service.create_transaction(
            date=date(2024, 3, 1),
            description="Cash deposit",
            entries=[
                JournalEntry("1200", debit=Decimal("100")),
                JournalEntry("1100", credit=Decimal("100")),
            ],
            hooks=[hook],
        )
        assert temp_db.list_assets() == []

    def test_no_suggestion_without_hook(self, temp_db, journal_service, seeded_accounts):
        journal_service.create_transaction(
            date=date(2024, 3, 1),
            description="Printer",
            entries=[
                JournalEntry("1500", debit=Decimal("2000000")),
                JournalEntry("1100", credit=Decimal("2000000")),
            ],
        )
        assert temp_db.list_assets() == []


class TestUpdateTransaction:
    def test_update_header_fields(self, journal_service, post):
        txn = post(date(2024, 1, 10), "5300", "1100", 100, description="Rent")

        updated = journal_service.update_transaction(
            txn.id, date=date(2024, 1, 11), reference="R-1", description="January rent"
        )
        assert updated.date == date(2024, 1, 11)
        assert updated.reference == "R-1"
        assert updated.description == "January rent"
        assert updated.entries == txn.entries

    def test_update_missing(self, journal_service, seeded_accounts):
        with pytest.raises(NotFoundError):
            journal_service.update_transaction("123", description="x")


class TestDeleteTransaction:
    def test_create_then_delete_restores_balances(self, temp_db, journal_service, post):
        post(date(2024, 1, 1), "1200", "3100", 5000)
        before = _balances(temp_db)

        txn = journal_service.create_transaction(
            date=date(2024, 1, 5),
            description="Mixed",
            entries=[
                JournalEntry("5300", debit=Decimal("1250.50")),
                JournalEntry("5200", debit=Decimal("749.50")),
                JournalEntry("1200", credit=Decimal("2000")),
            ],
        )
        journal_service.delete_transaction(txn.id)

        assert _balances(temp_db) == before
        assert temp_db.get_transaction(txn.id) is None

    def test_delete_missing(self, journal_service, seeded_accounts):
        with pytest.raises(NotFoundError):
            journal_service.delete_transaction("does-not-exist")

    def test_delete_with_removed_account_changes_nothing(
        self, temp_db, journal_service, account_service, post
    ):
        account_service.create_account("1700", "Vehicles", "asset")
        txn = post(date(2024, 1, 1), "1700", "1100", 100)
        # Bring 1700 back to zero so it can be deleted
        post(date(2024, 1, 2), "1100", "1700", 100)
        account_service.delete_account("1700")
        before = _balances(temp_db)

        with pytest.raises(AccountNotFoundError):
            journal_service.delete_transaction(txn.id)

        assert temp_db.get_transaction(txn.id) is not None
        assert _balances(temp_db) == before


class TestBulk:
    def test_bulk_creates_n_transactions_with_zero_global_delta(
        self, temp_db, journal_service, seeded_accounts
    ):
        before = _balances(temp_db)
        payloads = [
            TransactionPayload(
                date=date(2024, 1, day),
                description=f"Sale {day}",
                entries=(
                    JournalEntry("1100", debit=Decimal(day * 1000)),
                    JournalEntry("4100", credit=Decimal(day * 1000)),
                ),
            )
            for day in range(1, 11)
        ]

        transactions = journal_service.add_bulk_transactions(payloads)

        assert len(transactions) == 10
        assert temp_db.count_transactions() == 10
        for txn in transactions:
            assert txn.total_debit == txn.total_credit > 0

        after = _balances(temp_db)
        assert after["1100"] - before["1100"] == Decimal("55000")
        assert after["4100"] - before["4100"] == Decimal("55000")

        # Debits and credits cancel across the batch
        raw_total = sum(
            (e.debit - e.credit for txn in transactions for e in txn.entries), Decimal("0")
        )
        assert raw_total == 0

    def test_bulk_invalid_payload_writes_nothing(self, temp_db, journal_service, seeded_accounts):
        payloads = [
            TransactionPayload(
                date=date(2024, 1, 1),
                description="Good",
                entries=(
                    JournalEntry("1100", debit=Decimal("1")),
                    JournalEntry("4100", credit=Decimal("1")),
                ),
            ),
            TransactionPayload(
                date=date(2024, 1, 2),
                description="Bad",
                entries=(
                    JournalEntry("1100", debit=Decimal("1")),
                    JournalEntry("4100", credit=Decimal("2")),
                ),
            ),
        ]
        with pytest.raises(ValidationError, match="Transaction 2"):
            journal_service.add_bulk_transactions(payloads)
        assert temp_db.count_transactions() == 0

    def test_bulk_empty(self, journal_service):
        assert journal_service.add_bulk_transactions([]) == []


class TestListTransactions:
    def test_filters(self, journal_service, post):
        post(date(2024, 1, 5), "5300", "1100", 100, description="Rent January")
        post(date(2024, 2, 5), "5300", "1100", 100, description="Rent February")
        post(date(2024, 2, 7), "1100", "4100", 300, description="Service fee")

        february = journal_service.list_transactions(
            start_date=date(2024, 2, 1), end_date=date(2024, 2, 29)
        )
        assert [t.description for t in february] == ["Service fee", "Rent February"]

        rent = journal_service.list_transactions(account_code="5300")
        assert len(rent) == 2

        found = journal_service.list_transactions(search="JANUARY")
        assert [t.description for t in found] == ["Rent January"]
