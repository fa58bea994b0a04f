"""Tests for financial reports."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerbook.domain.entities import Account, AccountType, JournalEntry, Transaction
from ledgerbook.domain.errors import AccountNotFoundError, ValidationError
from ledgerbook.domain.reporting import (
    build_balance_sheet,
    compute_changes,
    opening_balance,
    partition_transactions,
)

M = Decimal("1000000")


@pytest.fixture
def books(post):
    """A small quarter of activity."""
    post(date(2024, 1, 5), "1200", "3100", 100 * M, description="Owner capital")
    post(date(2024, 2, 10), "1300", "4100", 20 * M, description="Consulting invoice")
    post(date(2024, 3, 1), "5300", "1200", 5 * M, description="Office rent")
    post(date(2024, 3, 15), "5200", "1200", 8 * M, description="Salaries")
    post(date(2024, 4, 20), "1200", "2200", 10 * M, description="Bank loan")


def _line(lines, code):
    return next(line for line in lines if line.code == code)


class TestIncomeStatement:
    def test_revenue_is_credit_positive(self, reporting_service, books):
        statement = reporting_service.income_statement(date(2024, 2, 1), date(2024, 3, 31))

        assert _line(statement.revenues, "4100").amount == 20 * M
        assert _line(statement.expenses, "5300").amount == 5 * M
        assert _line(statement.expenses, "5200").amount == 8 * M
        assert statement.total_revenue == 20 * M
        assert statement.total_expense == 13 * M
        assert statement.net_income == 7 * M

    def test_lists_every_revenue_and_expense_account(self, reporting_service, books):
        statement = reporting_service.income_statement(date(2024, 1, 1), date(2024, 1, 31))
        assert [line.code for line in statement.revenues] == ["4100"]
        assert len(statement.expenses) == 5
        assert statement.net_income == 0

    def test_rejects_inverted_period(self, reporting_service):
        with pytest.raises(ValidationError):
            reporting_service.income_statement(date(2024, 2, 1), date(2024, 1, 1))


class TestBalanceSheet:
    def test_closing_balances(self, reporting_service, books):
        sheet = reporting_service.balance_sheet(date(2024, 3, 1), date(2024, 3, 31))

        assert _line(sheet.assets, "1200").amount == 87 * M
        assert _line(sheet.assets, "1300").amount == 20 * M
        assert _line(sheet.liabilities, "2200").amount == 0
        assert _line(sheet.equity, "3100").amount == 100 * M
        # Prior and current net income both land in retained earnings
        assert _line(sheet.equity, "3200").amount == 7 * M
        assert sheet.total_assets == 107 * M
        assert sheet.total_liabilities_and_equity == 107 * M
        assert sheet.is_balanced
        assert sheet.difference == 0

    @pytest.mark.parametrize(
        "start,end",
        [
            (date(2024, 1, 1), date(2024, 1, 31)),
            (date(2024, 2, 1), date(2024, 2, 29)),
            (date(2024, 2, 15), date(2024, 3, 20)),
            (date(2024, 1, 1), date(2024, 12, 31)),
            (date(2025, 1, 1), date(2025, 6, 30)),
            (date(2023, 1, 1), date(2023, 12, 31)),
        ],
    )
    def test_balanced_for_any_period(self, reporting_service, books, start, end):
        assert reporting_service.balance_sheet(start, end).is_balanced

    def test_stored_balances_not_changed(self, temp_db, reporting_service, books):
        before = temp_db.get_account("3200").balance
        reporting_service.balance_sheet(date(2024, 1, 1), date(2024, 12, 31))
        assert temp_db.get_account("3200").balance == before

    def test_unallocated_earnings_line_without_retained_earnings_account(self):
        accounts = [
            Account("1100", "Cash", AccountType.ASSET, Decimal("0")),
            Account("4100", "Sales", AccountType.REVENUE, Decimal("0")),
        ]
        txn = Transaction(
            id="1",
            date=date(2024, 1, 1),
            description="Sale",
            entries=(
                JournalEntry("1100", debit=Decimal("10")),
                JournalEntry("4100", credit=Decimal("10")),
            ),
        )
        sheet = build_balance_sheet(accounts, [txn], date(2024, 1, 1), date(2024, 1, 31))
        assert sheet.equity[-1].amount == Decimal("10")
        assert sheet.is_balanced


class TestHelpers:
    def test_partition(self, journal_service, books):
        transactions = journal_service.list_transactions()
        prior, period = partition_transactions(transactions, date(2024, 3, 1), date(2024, 3, 31))
        assert len(prior) == 2
        assert len(period) == 2

    def test_compute_changes_ignores_deleted_accounts(self, temp_db, journal_service, books):
        accounts = [a for a in temp_db.list_accounts() if a.code != "1300"]
        changes = compute_changes(journal_service.list_transactions(), accounts)
        assert "1300" not in changes
        assert changes["4100"] == 20 * M


class TestAccountLedger:
    def test_running_balance_ends_at_stored_balance(self, temp_db, reporting_service, books):
        ledger = reporting_service.account_ledger("1200")

        assert [line.running_balance for line in ledger.lines] == [
            100 * M,
            95 * M,
            87 * M,
            97 * M,
        ]
        assert ledger.lines[-1].running_balance == temp_db.get_account("1200").balance
        assert opening_balance(ledger) == 0

    def test_filtered_opening_matches_history(self, journal_service, reporting_service, books):
        ledger = reporting_service.account_ledger("1200", start_date=date(2024, 3, 1))

        assert [line.date for line in ledger.lines] == [
            date(2024, 3, 1),
            date(2024, 3, 15),
            date(2024, 4, 20),
        ]
        prior, _ = partition_transactions(
            journal_service.list_transactions(), date(2024, 3, 1), date(2024, 12, 31)
        )
        recomputed = compute_changes(prior, [reporting_service.db.get_account("1200")])
        assert opening_balance(ledger) == recomputed["1200"]

    def test_initial_balance_is_the_anchor(self, account_service, reporting_service, post):
        account_service.create_account("1700", "Vehicles", "asset", balance=Decimal("1000"))
        post(date(2024, 1, 1), "1700", "1100", 500)
        post(date(2024, 1, 2), "1100", "1700", 200)

        ledger = reporting_service.account_ledger("1700")
        assert [line.running_balance for line in ledger.lines] == [Decimal("1500"), Decimal("1300")]
        assert opening_balance(ledger) == Decimal("1000")

    def test_search_filter_keeps_true_balances(self, reporting_service, books):
        ledger = reporting_service.account_ledger("1200", search="salaries")
        assert len(ledger.lines) == 1
        assert ledger.lines[0].running_balance == 87 * M
        assert ledger.lines[0].credit == 8 * M

    def test_unknown_account(self, reporting_service, seeded_accounts):
        with pytest.raises(AccountNotFoundError):
            reporting_service.account_ledger("9999")


class TestDepreciationScheduleAndStats:
    def test_schedule_lists_depreciable_assets(self, asset_service, reporting_service):
        asset_service.create_asset(
            name="Machine",
            cost=Decimal("3650000"),
            date=date(2024, 1, 1),
            is_depreciable=True,
            life=1,
        )
        asset_service.create_asset(name="Land", cost=Decimal("900000000"), date=date(2024, 1, 1))

        rows = reporting_service.depreciation_schedule(date(2024, 1, 1), date(2024, 1, 10))
        assert len(rows) == 1
        assert rows[0].asset.name == "Machine"
        assert rows[0].period_depreciation == Decimal("100000")

    def test_dashboard_stats(self, asset_service, reporting_service, books):
        asset_service.create_asset(name="Desk", cost=Decimal("1"), date=date(2024, 1, 1))
        stats = reporting_service.dashboard_stats()
        assert stats.account_count == 17
        assert stats.transaction_count == 5
        assert stats.asset_count == 1
