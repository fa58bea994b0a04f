"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class AccountNotFoundError(NotFoundError):
    """An account code could not be resolved."""

    def __init__(self, code: str, context: str = ""):
        self.code = code
        message = f"Account {code} not found"
        if context:
            message = f"{message} during {context}"
        super().__init__(message)


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class IntegrityError(DomainError):
    """A write left, or would have left, the store partially updated."""


class PermissionDeniedError(DomainError):
    """The current role may not perform the operation."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def asset_not_found(asset_id: str) -> str:
    """Return message for missing asset."""
    return f"Asset {asset_id} not found"


def duplicate_account_code(code: str) -> str:
    """Return message for an account code already in use."""
    return f"Account with code '{code}' already exists"


def account_delete_blocked(code: str, balance: Decimal) -> str:
    """Return message when an account still carries a balance."""
    return (
        f"Cannot delete account {code}: its balance is {balance:,.2f}. "
        "Only accounts with a zero balance can be deleted."
    )


def unbalanced_entries(total_debit: Decimal, total_credit: Decimal) -> str:
    """Return message for entries whose sides do not match."""
    return (
        f"Total debit ({total_debit:,.2f}) must equal total credit "
        f"({total_credit:,.2f})"
    )


def account_code_in_use(code: str) -> str:
    """Return message when a code is still referenced by historic entries."""
    return (
        f"Account code '{code}' is still used by posted journal entries "
        "and cannot be reused"
    )


def account_type_locked(code: str) -> str:
    """Return message when an account type can no longer change."""
    return (
        f"Cannot change the type of account {code}: it has a balance or "
        "posted journal entries"
    )
