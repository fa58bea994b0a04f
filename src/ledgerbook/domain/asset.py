"""Fixed asset register service and the asset suggestion posting hook."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.chart import LedgerConfig
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Asset as AssetEntity,
    DepreciationMethod,
    Transaction,
)
from ledgerbook.domain.errors import NotFoundError, ValidationError, asset_not_found
from ledgerbook.domain.ids import IdGenerator, NumericIdGenerator
from ledgerbook.logging_config import get_logger

logger = get_logger(__name__)


def _parse_method(value: DepreciationMethod | str | None) -> Optional[DepreciationMethod]:
    if value is None or isinstance(value, DepreciationMethod):
        return value
    try:
        return DepreciationMethod(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in DepreciationMethod)
        raise ValidationError(
            f"Unknown depreciation method '{value}'. Valid methods: {valid}"
        ) from None


def validate_asset(asset: AssetEntity) -> AssetEntity:
    """Check asset fields and fill in the depreciation method default.

    Returns:
        The asset, with ``method`` set to straight-line when depreciable and
        unset, or cleared when not depreciable

    Raises:
        ValidationError: If a field is missing or out of range
    """
    if not asset.name or not asset.name.strip():
        raise ValidationError("Asset name is required")
    if asset.date is None:
        raise ValidationError("Asset acquisition date is required")
    if asset.cost < 0:
        raise ValidationError("Asset cost cannot be negative")
    if asset.residual < 0:
        raise ValidationError("Residual value cannot be negative")
    if asset.residual > asset.cost:
        raise ValidationError("Residual value cannot exceed cost")
    if asset.accumulated_depreciation < 0:
        raise ValidationError("Accumulated depreciation cannot be negative")

    if not asset.is_depreciable:
        return replace(asset, name=asset.name.strip(), life=None, method=None)

    if asset.life is None or asset.life <= 0:
        raise ValidationError("Useful life (years) must be greater than zero for depreciable assets")
    if asset.accumulated_depreciation > asset.depreciable_base:
        raise ValidationError("Accumulated depreciation cannot exceed cost minus residual value")
    return replace(
        asset,
        name=asset.name.strip(),
        method=asset.method or DepreciationMethod.STRAIGHT_LINE,
    )


class AssetService:
    """Service for managing the fixed asset register."""

    def __init__(self, db: Database, id_generator: Optional[IdGenerator] = None):
        """Initialize asset service.

        Args:
            db: Database instance
            id_generator: Source of asset ids (numeric by default)
        """
        self.db = db
        self.id_generator = id_generator or NumericIdGenerator()

    def create_asset(
        self,
        name: str,
        cost: Decimal,
        date: date,
        category: str = "",
        is_depreciable: bool = False,
        life: Optional[int] = None,
        residual: Decimal = Decimal("0"),
        method: DepreciationMethod | str | None = None,
        accumulated_depreciation: Decimal = Decimal("0"),
    ) -> AssetEntity:
        """Register a new asset.

        Args:
            name: Asset name
            cost: Acquisition cost
            date: Acquisition date
            category: Free-text category
            is_depreciable: Whether the asset is depreciated
            life: Useful life in years (required if depreciable)
            residual: Residual (salvage) value
            method: Depreciation method, straight-line if omitted
            accumulated_depreciation: Depreciation booked before registration

        Returns:
            Created asset entity

        Raises:
            ValidationError: If any field is invalid
        """
        asset = validate_asset(
            AssetEntity(
                id=self.id_generator.new_id(),
                name=name or "",
                category=(category or "").strip(),
                cost=cost,
                date=date,
                is_depreciable=is_depreciable,
                life=life,
                residual=residual,
                method=_parse_method(method),
                accumulated_depreciation=accumulated_depreciation,
            )
        )
        created = self.db.create_asset(asset)
        logger.info(
            "asset_created",
            extra={"asset_id": created.id, "cost": str(created.cost)},
        )
        return created

    def get_asset(self, asset_id: str) -> Optional[AssetEntity]:
        """Get asset by ID."""
        return self.db.get_asset(asset_id)

    def list_assets(self) -> list[AssetEntity]:
        """List all assets ordered by name."""
        return self.db.list_assets()

    def update_asset(self, asset_id: str, **changes: Any) -> AssetEntity:
        """Update asset fields.

        The merged asset is validated as a whole before anything is stored.

        Raises:
            NotFoundError: If the asset does not exist
            ValidationError: If the resulting asset is invalid or a field is unknown
        """
        current = self.db.get_asset(asset_id)
        if current is None:
            raise NotFoundError(asset_not_found(asset_id))

        if "method" in changes:
            changes["method"] = _parse_method(changes["method"])
        try:
            merged = replace(current, **changes)
        except TypeError as e:
            raise ValidationError(f"Invalid asset field: {e}") from e
        merged = validate_asset(merged)

        columns = {
            name: getattr(merged, name)
            for name in vars(merged)
            if name != "id" and getattr(merged, name) != getattr(current, name)
        }
        if not columns:
            return current
        return self.db.update_asset(asset_id, **columns)

    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset regardless of its remaining book value.

        Raises:
            NotFoundError: If the asset does not exist
        """
        if self.db.get_asset(asset_id) is None:
            raise NotFoundError(asset_not_found(asset_id))
        self.db.delete_asset(asset_id)
        logger.info("asset_deleted", extra={"asset_id": asset_id})


class AssetSuggestionHook:
    """Posting hook that registers assets bought through a transaction.

    Every entry that debits an asset account outside the configured
    exclusions (cash, bank, receivables, inventory, accumulated
    depreciation) becomes a non-depreciable asset the user can complete
    later.
    """

    def __init__(self, asset_service: AssetService, config: Optional[LedgerConfig] = None):
        self.asset_service = asset_service
        self.config = config or LedgerConfig()

    def __call__(self, transaction: Transaction, accounts: dict[str, Account]) -> None:
        for entry in transaction.entries:
            account = accounts.get(entry.account_code)
            if account is None or account.type != AccountType.ASSET:
                continue
            if entry.debit <= 0 or account.code in self.config.asset_suggestion_exclusions:
                continue
            asset = self.asset_service.create_asset(
                name=transaction.description,
                cost=entry.debit,
                date=transaction.date,
                category=account.name,
            )
            logger.info(
                "asset_suggested",
                extra={"asset_id": asset.id, "transaction_id": transaction.id},
            )
