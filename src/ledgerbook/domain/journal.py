"""Journal domain service.

Posting, editing and deleting transactions while keeping every account's
stored balance equal to its initial balance plus the signed effect of all
entries that reference it.
"""

from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    Account,
    JournalEntry,
    Transaction as TransactionEntity,
    TransactionPayload,
)
from ledgerbook.domain.errors import (
    DomainError,
    IntegrityError,
    NotFoundError,
    ValidationError,
    transaction_not_found,
)
from ledgerbook.domain.ids import IdGenerator, NumericIdGenerator
from ledgerbook.domain.ledger import (
    balance_deltas,
    index_accounts,
    merge_deltas,
    reverse_deltas,
    validate_entries,
)
from ledgerbook.logging_config import get_logger

logger = get_logger(__name__)

# Called after a transaction and its balance updates are stored
PostingHook = Callable[[TransactionEntity, dict[str, Account]], None]


class JournalService:
    """Service for posting and maintaining journal transactions."""

    def __init__(
        self,
        db: Database,
        id_generator: Optional[IdGenerator] = None,
        hooks: Sequence[PostingHook] = (),
    ):
        """Initialize journal service.

        Args:
            db: Database instance
            id_generator: Source of transaction ids (numeric by default)
            hooks: Post-processing hooks run after every successful post
        """
        self.db = db
        self.id_generator = id_generator or NumericIdGenerator()
        self.hooks = tuple(hooks)

    def _build_payload(
        self,
        date: date,
        description: str,
        entries: Iterable[JournalEntry],
        reference: Optional[str],
    ) -> TransactionPayload:
        description = (description or "").strip()
        if not description:
            raise ValidationError("Transaction description is required")
        if date is None:
            raise ValidationError("Transaction date is required")
        entries = tuple(entries)
        validate_entries(entries)
        return TransactionPayload(
            date=date,
            description=description,
            entries=entries,
            reference=(reference or "").strip() or None,
        )

    def create_transaction(
        self,
        date: date,
        description: str,
        entries: Iterable[JournalEntry],
        reference: Optional[str] = None,
        hooks: Sequence[PostingHook] = (),
    ) -> TransactionEntity:
        """Post a balanced transaction and update affected account balances.

        Args:
            date: Transaction date
            description: Transaction description
            entries: Journal entries (at least two, balanced)
            reference: Optional external document number
            hooks: Extra post-processing hooks for this call only

        Returns:
            The stored transaction

        Raises:
            ValidationError: If the entries break the double-entry rules
            AccountNotFoundError: If an entry references an unknown account
            IntegrityError: If the transaction could not be stored completely
        """
        payload = self._build_payload(date, description, entries, reference)

        # Resolve every account before writing anything
        accounts = index_accounts(self.db.list_accounts())
        deltas = balance_deltas(payload.entries, accounts, "balance update")

        transaction_id = self.id_generator.new_id()
        try:
            transaction = self.db.create_transaction(transaction_id, payload)
        except IntegrityError:
            self._discard_orphaned_header(transaction_id)
            raise

        try:
            self.db.adjust_account_balances(deltas)
        except DomainError:
            logger.error(
                "balance_update_failed",
                extra={"transaction_id": transaction_id, "accounts": sorted(deltas)},
            )
            raise

        logger.info(
            "transaction_posted",
            extra={
                "transaction_id": transaction_id,
                "amount": str(transaction.total_debit),
                "entries": len(transaction.entries),
            },
        )
        self._run_hooks(transaction, accounts, (*self.hooks, *hooks))
        return transaction

    def _discard_orphaned_header(self, transaction_id: str) -> None:
        """Delete a header stored without its entries, if one exists."""
        try:
            if self.db.get_transaction(transaction_id) is not None:
                self.db.delete_transaction(transaction_id)
                logger.warning(
                    "orphaned_transaction_removed", extra={"transaction_id": transaction_id}
                )
        except Exception:
            logger.exception(
                "orphaned_transaction_cleanup_failed",
                extra={"transaction_id": transaction_id},
            )

    def _run_hooks(
        self,
        transaction: TransactionEntity,
        accounts: dict[str, Account],
        hooks: Sequence[PostingHook],
    ) -> None:
        for hook in hooks:
            try:
                hook(transaction, accounts)
            except Exception:
                # The transaction is already stored
                logger.warning(
                    "posting_hook_failed",
                    exc_info=True,
                    extra={"transaction_id": transaction.id},
                )

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_code: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_code: Optional account filter
            search: Case-insensitive text matched against description and reference

        Returns:
            List of transaction entities, newest first
        """
        transactions = self.db.list_transactions(
            start_date=start_date, end_date=end_date, account_code=account_code
        )
        if search:
            needle = search.lower()
            transactions = [
                txn
                for txn in transactions
                if needle in txn.description.lower()
                or (txn.reference and needle in txn.reference.lower())
            ]
        return transactions

    def update_transaction(
        self,
        transaction_id: str,
        date: Optional[date] = None,
        reference: Optional[str] = None,
        description: Optional[str] = None,
    ) -> TransactionEntity:
        """Update transaction header fields.

        Entries are immutable once posted; only date, reference and
        description can change.

        Raises:
            NotFoundError: If the transaction does not exist
            ValidationError: If the description is set to an empty value
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if description is not None and not description.strip():
            raise ValidationError("Transaction description cannot be empty")

        return self.db.update_transaction(
            transaction_id=transaction_id,
            date=date,
            reference=reference,
            description=description.strip() if description is not None else None,
        )

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction and reverse its effect on account balances.

        Balances are reversed against the currently stored values before the
        transaction row is removed.

        Raises:
            NotFoundError: If the transaction does not exist
            AccountNotFoundError: If a referenced account was deleted; nothing
                is changed in that case
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        accounts = index_accounts(self.db.list_accounts())
        deltas = reverse_deltas(balance_deltas(transaction.entries, accounts, "balance reversal"))

        self.db.adjust_account_balances(deltas)
        try:
            self.db.delete_transaction(transaction_id)
        except DomainError:
            logger.error(
                "transaction_delete_failed_after_reversal",
                extra={"transaction_id": transaction_id, "accounts": sorted(deltas)},
            )
            raise

        logger.info("transaction_deleted", extra={"transaction_id": transaction_id})

    def add_bulk_transactions(
        self, payloads: Sequence[TransactionPayload]
    ) -> list[TransactionEntity]:
        """Store many transactions at once and reconcile balances afterwards.

        Headers are inserted first, then all entries. If entry insertion
        fails, headers already written are left without entries and an
        IntegrityError is raised; balances are untouched in that case.

        Raises:
            ValidationError: If any payload is invalid (nothing is written)
            AccountNotFoundError: If any payload references an unknown account
            IntegrityError: If the batch could not be stored completely
        """
        if not payloads:
            return []

        accounts = index_accounts(self.db.list_accounts())
        checked = []
        all_deltas = []
        for number, payload in enumerate(payloads, start=1):
            try:
                checked_payload = self._build_payload(
                    payload.date, payload.description, payload.entries, payload.reference
                )
            except ValidationError as e:
                raise ValidationError(f"Transaction {number}: {e}") from e
            all_deltas.append(balance_deltas(checked_payload.entries, accounts, "bulk import"))
            checked.append(checked_payload)

        items = [(self.id_generator.new_id(), payload) for payload in checked]
        transactions = self.db.create_bulk_transactions(items)

        deltas = merge_deltas(*all_deltas)
        try:
            self.db.adjust_account_balances(deltas)
        except DomainError:
            logger.error(
                "bulk_balance_reconcile_failed",
                extra={"transactions": len(transactions), "accounts": sorted(deltas)},
            )
            raise

        logger.info("bulk_transactions_posted", extra={"count": len(transactions)})
        return transactions
