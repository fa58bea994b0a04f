"""Account domain service."""

from decimal import Decimal
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.chart import DEFAULT_ACCOUNTS
from ledgerbook.domain.entities import Account as AccountEntity, AccountType
from ledgerbook.domain.errors import (
    AccountNotFoundError,
    ConflictError,
    DependencyError,
    ValidationError,
    account_code_in_use,
    account_delete_blocked,
    account_type_locked,
    duplicate_account_code,
)
from ledgerbook.logging_config import get_logger

logger = get_logger(__name__)


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        code: str,
        name: str,
        type: AccountType | str,
        balance: Decimal = Decimal("0"),
        description: Optional[str] = None,
    ) -> AccountEntity:
        """Create a new account.

        Args:
            code: Unique account code
            name: Account name
            type: Account type (enum or its name)
            balance: Initial balance
            description: Optional description

        Returns:
            Created account entity

        Raises:
            ValidationError: If code or name is empty or the type is unknown
            ConflictError: If an account with the same code exists, or journal
                entries still reference the code of a deleted account
        """
        code = (code or "").strip()
        name = (name or "").strip()
        if not code:
            raise ValidationError("Account code is required")
        if not name:
            raise ValidationError("Account name is required")
        try:
            account_type = AccountType.parse(type)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if self.db.get_account(code) is not None:
            raise ConflictError(duplicate_account_code(code))
        # Codes of deleted accounts stay attached to their historic entries
        if self.db.list_transactions(account_code=code):
            raise ConflictError(account_code_in_use(code))

        account = self.db.create_account(
            code=code,
            name=name,
            type=account_type,
            balance=balance,
            description=description,
        )
        logger.info("account_created", extra={"code": code, "type": account_type.value})
        return account

    def get_account(self, code: str) -> Optional[AccountEntity]:
        """Get account by code.

        Args:
            code: Account code

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(code)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities ordered by code
        """
        return self.db.list_accounts()

    def update_account(
        self,
        code: str,
        name: Optional[str] = None,
        type: AccountType | str | None = None,
        description: Optional[str] = None,
    ) -> AccountEntity:
        """Update an account's descriptive fields.

        The balance cannot be changed here; it moves only with posted entries.

        Raises:
            AccountNotFoundError: If the account does not exist
            ValidationError: If the new name is empty, the type unknown, or the
                type changes on an account with a balance or posted entries
        """
        current = self.db.get_account(code)
        if current is None:
            raise AccountNotFoundError(code)
        if name is not None and not name.strip():
            raise ValidationError("Account name cannot be empty")

        account_type = None
        if type is not None:
            try:
                account_type = AccountType.parse(type)
            except ValueError as e:
                raise ValidationError(str(e)) from e
            if account_type != current.type and (
                current.balance != 0 or self.db.list_transactions(account_code=code)
            ):
                raise ValidationError(account_type_locked(code))

        return self.db.update_account(
            code=code,
            name=name.strip() if name is not None else None,
            type=account_type,
            description=description,
        )

    def delete_account(self, code: str) -> None:
        """Delete an account.

        Args:
            code: Account code to delete

        Raises:
            AccountNotFoundError: If account not found
            DependencyError: If the account balance is not exactly zero
        """
        account = self.db.get_account(code)
        if account is None:
            raise AccountNotFoundError(code)

        if account.balance != 0:
            raise DependencyError(account_delete_blocked(code, account.balance))

        self.db.delete_account(code)
        logger.info("account_deleted", extra={"code": code})

    def seed_default_accounts(self) -> list[AccountEntity]:
        """Create the default chart of accounts when no accounts exist.

        Returns:
            Accounts created (empty if the chart was already populated)
        """
        if self.db.count_accounts() > 0:
            return []

        created = []
        for code, name, account_type, description in DEFAULT_ACCOUNTS:
            created.append(
                self.db.create_account(
                    code=code, name=name, type=account_type, description=description
                )
            )
        logger.info("default_accounts_seeded", extra={"count": len(created)})
        return created
