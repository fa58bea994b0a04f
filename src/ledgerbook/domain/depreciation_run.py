"""Depreciation run: preview what is owed and post it to the ledger."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.chart import LedgerConfig
from ledgerbook.domain.depreciation import depreciation_due
from ledgerbook.domain.entities import DepreciationItem, JournalEntry, Transaction
from ledgerbook.domain.errors import NotFoundError, ValidationError, asset_not_found
from ledgerbook.domain.journal import JournalService
from ledgerbook.logging_config import get_logger

logger = get_logger(__name__)


class DepreciationRunService:
    """Coordinates periodic depreciation postings."""

    def __init__(
        self,
        db: Database,
        journal_service: JournalService,
        config: Optional[LedgerConfig] = None,
    ):
        """Initialize depreciation run service.

        Args:
            db: Database instance
            journal_service: Journal engine used to post the run
            config: Fixed account roles (expense and accumulated depreciation)
        """
        self.db = db
        self.journal_service = journal_service
        self.config = config or LedgerConfig()

    def preview(self, as_of: date) -> list[DepreciationItem]:
        """Calculate depreciation owed by every asset up to a date.

        Nothing is written.

        Args:
            as_of: Date through which depreciation is calculated

        Returns:
            Items with a positive amount, in asset name order
        """
        items = []
        for asset in self.db.list_assets():
            amount = depreciation_due(asset, as_of)
            if amount > 0:
                items.append(DepreciationItem(asset=asset, amount=amount))
        return items

    def commit(self, as_of: date, items: Sequence[DepreciationItem]) -> Transaction:
        """Post a depreciation run and mark the assets as depreciated.

        One transaction dated ``as_of`` debits depreciation expense and
        credits accumulated depreciation for the total. Assets are updated
        only after that transaction is posted.

        Each asset is reloaded first, and an item whose amount is more than
        the asset still owes as of ``as_of`` is rejected. Committing the same
        preview twice therefore fails the second time.

        Args:
            as_of: Run date
            items: Items from :meth:`preview`

        Returns:
            The posted transaction

        Raises:
            ValidationError: If there is nothing to post, an amount is not
                positive or an amount exceeds what the asset still owes
            NotFoundError: If an asset no longer exists
            DomainError: If posting fails (no asset is touched) or an asset
                update fails (earlier assets stay updated)
        """
        if not items:
            raise ValidationError("No assets to depreciate up to the selected date")
        for item in items:
            if item.amount <= 0:
                raise ValidationError(
                    f"Depreciation amount for asset {item.asset.id} must be greater than zero"
                )

        current = []
        for item in items:
            asset = self.db.get_asset(item.asset.id)
            if asset is None:
                raise NotFoundError(asset_not_found(item.asset.id))
            due = depreciation_due(asset, as_of)
            if item.amount > due:
                raise ValidationError(
                    f"Depreciation for asset {asset.id} ({item.amount:,.2f}) exceeds "
                    f"the {due:,.2f} still owed up to {as_of.isoformat()}"
                )
            current.append(DepreciationItem(asset=asset, amount=item.amount))

        total = sum((item.amount for item in current), Decimal("0"))
        transaction = self.journal_service.create_transaction(
            date=as_of,
            description=f"Depreciation through {as_of.isoformat()}",
            entries=[
                JournalEntry(account_code=self.config.depreciation_expense_code, debit=total),
                JournalEntry(account_code=self.config.accumulated_depreciation_code, credit=total),
            ],
            reference="DEPRECIATION",
        )

        for item in current:
            asset = item.asset
            accumulated = min(
                asset.accumulated_depreciation + item.amount, asset.depreciable_base
            )
            self.db.update_asset(
                asset.id,
                accumulated_depreciation=accumulated,
                last_depreciation_date=as_of,
            )

        logger.info(
            "depreciation_committed",
            extra={
                "transaction_id": transaction.id,
                "assets": len(items),
                "total": str(total),
            },
        )
        return transaction
