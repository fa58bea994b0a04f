"""Domain layer for ledgerbook application."""

import importlib

_SERVICES = {
    "AccountService": "ledgerbook.domain.account",
    "AssetService": "ledgerbook.domain.asset",
    "BulkImportService": "ledgerbook.domain.bulk_import",
    "DepreciationRunService": "ledgerbook.domain.depreciation_run",
    "JournalService": "ledgerbook.domain.journal",
    "ReportingService": "ledgerbook.domain.reporting",
    "SettingsService": "ledgerbook.domain.settings",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports entities from this
# package, so they are resolved lazily
def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
