"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Mapping, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Asset,
    CompanySettings,
    TaxSettings,
    Transaction,
    TransactionPayload,
)


class Database(ABC):
    """Abstract database interface for ledgerbook.

    Implementations persist accounts, transactions with their journal
    entries, assets and the settings singletons. They never generate
    transaction or asset ids; callers pass them in.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        code: str,
        name: str,
        type: AccountType,
        balance: Decimal = Decimal("0"),
        description: Optional[str] = None,
    ) -> Account:
        """Create a new account."""
        pass

    @abstractmethod
    def get_account(self, code: str) -> Optional[Account]:
        """Get account by code."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by code."""
        pass

    @abstractmethod
    def update_account(
        self,
        code: str,
        name: Optional[str] = None,
        type: Optional[AccountType] = None,
        description: Optional[str] = None,
    ) -> Account:
        """Update descriptive account fields. Balances are not writable here."""
        pass

    @abstractmethod
    def delete_account(self, code: str) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def adjust_account_balances(self, deltas: Mapping[str, Decimal]) -> None:
        """Add each delta to the stored balance of its account.

        The increments are applied in the database (``balance = balance + delta``)
        as one unit of work.

        Raises:
            AccountNotFoundError: If any code does not exist; no balance changes
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, transaction_id: str, payload: TransactionPayload) -> Transaction:
        """Persist a transaction header and its entries.

        Raises:
            IntegrityError: If the transaction could not be stored completely
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, including entries."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_code: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions (with entries), newest first.

        Args:
            start_date: Optional inclusive start date filter
            end_date: Optional inclusive end date filter
            account_code: Only transactions with an entry for this account
        """
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: str,
        date: Optional[date] = None,
        reference: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Transaction:
        """Update transaction header fields."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction; its entries are deleted with it."""
        pass

    @abstractmethod
    def create_bulk_transactions(
        self, items: Sequence[tuple[str, TransactionPayload]]
    ) -> list[Transaction]:
        """Insert all headers, then all entries.

        Not atomic across the batch: if entry insertion fails the headers
        already stored remain without entries.

        Raises:
            IntegrityError: If headers or entries could not be inserted
        """
        pass

    # Asset operations
    @abstractmethod
    def create_asset(self, asset: Asset) -> Asset:
        """Store a new asset (its id is assigned by the caller)."""
        pass

    @abstractmethod
    def get_asset(self, asset_id: str) -> Optional[Asset]:
        """Get asset by ID."""
        pass

    @abstractmethod
    def list_assets(self) -> list[Asset]:
        """List all assets ordered by name."""
        pass

    @abstractmethod
    def update_asset(self, asset_id: str, **changes: Any) -> Asset:
        """Update asset fields by keyword."""
        pass

    @abstractmethod
    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset."""
        pass

    # Settings operations
    @abstractmethod
    def get_company_settings(self) -> Optional[CompanySettings]:
        """Get the company settings row, or None if never saved."""
        pass

    @abstractmethod
    def save_company_settings(self, settings: CompanySettings) -> None:
        """Insert or replace the company settings row."""
        pass

    @abstractmethod
    def get_tax_settings(self) -> Optional[TaxSettings]:
        """Get the tax settings row, or None if never saved."""
        pass

    @abstractmethod
    def save_tax_settings(self, settings: TaxSettings) -> None:
        """Insert or replace the tax settings row."""
        pass

    # Counts
    @abstractmethod
    def count_accounts(self) -> int:
        """Number of accounts."""
        pass

    @abstractmethod
    def count_transactions(self) -> int:
        """Number of transactions."""
        pass

    @abstractmethod
    def count_assets(self) -> int:
        """Number of assets."""
        pass
