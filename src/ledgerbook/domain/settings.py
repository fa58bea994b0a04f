"""Company and tax settings service."""

from dataclasses import fields, replace
from typing import Any

from ledgerbook.database.base import Database
from ledgerbook.domain.chart import default_company_settings, default_tax_settings
from ledgerbook.domain.entities import CompanySettings, TaxSettings
from ledgerbook.domain.errors import ValidationError
from ledgerbook.logging_config import get_logger

logger = get_logger(__name__)


def _apply_changes(current, changes: dict[str, Any]):
    known = {f.name for f in fields(current)}
    unknown = set(changes) - known
    if unknown:
        raise ValidationError(
            f"Unknown setting(s): {', '.join(sorted(unknown))}. "
            f"Valid settings: {', '.join(sorted(known))}"
        )
    return replace(current, **changes)


class SettingsService:
    """Service for the company profile and tax settings singletons.

    Until settings are saved, reads return the defaults.
    """

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_company_settings(self) -> CompanySettings:
        return self.db.get_company_settings() or default_company_settings()

    def save_company_settings(self, settings: CompanySettings) -> CompanySettings:
        """Store company settings, replacing any previous values.

        Raises:
            ValidationError: If the company name is empty
        """
        if not settings.name or not settings.name.strip():
            raise ValidationError("Company name is required")
        self.db.save_company_settings(settings)
        logger.info("company_settings_saved")
        return settings

    def update_company_settings(self, **changes: Any) -> CompanySettings:
        """Change selected company settings fields."""
        return self.save_company_settings(_apply_changes(self.get_company_settings(), changes))

    def get_tax_settings(self) -> TaxSettings:
        return self.db.get_tax_settings() or default_tax_settings()

    def save_tax_settings(self, settings: TaxSettings) -> TaxSettings:
        """Store tax settings, replacing any previous values.

        Raises:
            ValidationError: If the tax rate is outside 0-100 or the
                minimum taxable income is negative
        """
        if not 0 <= settings.corporate_tax_rate <= 100:
            raise ValidationError("Corporate tax rate must be between 0 and 100")
        if settings.minimum_taxable_income < 0:
            raise ValidationError("Minimum taxable income cannot be negative")
        self.db.save_tax_settings(settings)
        logger.info("tax_settings_saved")
        return settings

    def update_tax_settings(self, **changes: Any) -> TaxSettings:
        """Change selected tax settings fields."""
        return self.save_tax_settings(_apply_changes(self.get_tax_settings(), changes))
