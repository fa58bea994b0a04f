"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.asset import AssetService
from ledgerbook.domain.chart import LedgerConfig
from ledgerbook.domain.depreciation_run import DepreciationRunService
from ledgerbook.domain.entities import JournalEntry
from ledgerbook.domain.journal import JournalService
from ledgerbook.domain.reporting import ReportingService
from ledgerbook.domain.settings import SettingsService
from ledgerbook.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db)


@pytest.fixture
def asset_service(temp_db):
    """Create an AssetService with a temporary database."""
    return AssetService(temp_db)


@pytest.fixture
def reporting_service(temp_db):
    """Create a ReportingService with a temporary database."""
    return ReportingService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def depreciation_run_service(temp_db, journal_service):
    """Create a DepreciationRunService with a temporary database."""
    return DepreciationRunService(temp_db, journal_service, LedgerConfig())


@pytest.fixture
def seeded_accounts(account_service):
    """Seed the default chart of accounts and return it keyed by code."""
    account_service.seed_default_accounts()
    return {acc.code: acc for acc in account_service.list_accounts()}


@pytest.fixture
def post(journal_service, seeded_accounts):
    """Post a simple two-line transaction: post(date, debit_code, credit_code, amount)."""

    def _post(txn_date: date, debit_code: str, credit_code: str, amount, description="Test"):
        amount = Decimal(str(amount))
        return journal_service.create_transaction(
            date=txn_date,
            description=description,
            entries=[
                JournalEntry(account_code=debit_code, debit=amount),
                JournalEntry(account_code=credit_code, credit=amount),
            ],
        )

    return _post


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
