"""Double-entry bookkeeping, fixed asset depreciation and financial reports."""

__version__ = "0.1.0"
