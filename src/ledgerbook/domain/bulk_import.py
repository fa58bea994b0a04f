"""Bulk transaction import from CSV or XLSX files.

Each data row becomes one two-entry transaction: the debit account is
debited and the credit account credited for the row amount. Every row is
validated before anything is written; a file with any invalid row is not
imported at all.
"""

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

import openpyxl

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import JournalEntry, Transaction, TransactionPayload
from ledgerbook.domain.errors import ValidationError
from ledgerbook.domain.journal import JournalService
from ledgerbook.logging_config import get_logger
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date

logger = get_logger(__name__)

DATE = "Date"
DESCRIPTION = "Description"
REFERENCE = "Reference"
DEBIT_ACCOUNT = "DebitAccountCode"
CREDIT_ACCOUNT = "CreditAccountCode"
AMOUNT = "Amount"

COLUMNS = (DATE, DESCRIPTION, REFERENCE, DEBIT_ACCOUNT, CREDIT_ACCOUNT, AMOUNT)
REQUIRED_COLUMNS = (DATE, DESCRIPTION, DEBIT_ACCOUNT, CREDIT_ACCOUNT, AMOUNT)

CSV_SUFFIXES = {".csv", ".txt"}
XLSX_SUFFIXES = {".xlsx", ".xlsm"}


@dataclass
class ImportResult:
    """Outcome of a bulk import."""

    rows: int = 0
    payloads: list[TransactionPayload] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def imported(self) -> int:
        return len(self.transactions)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _normalize_rows(header: list[Any], rows: Iterator[tuple]) -> Iterator[tuple[int, dict]]:
    """Map raw rows to the canonical column names, skipping blank rows.

    Header names are matched case-insensitively. Yields (row number, row)
    with the header counted as row 1.
    """
    canonical = {name.lower(): name for name in COLUMNS}
    names = [canonical.get(_cell_text(h).lower(), _cell_text(h)) for h in header]

    missing = [c for c in REQUIRED_COLUMNS if c not in names]
    if missing:
        raise ValidationError(f"Import file is missing required columns: {', '.join(missing)}")

    for row_number, values in enumerate(rows, start=2):
        if all(_cell_text(v) == "" for v in values):
            continue
        yield row_number, {name: value for name, value in zip(names, values)}


def read_csv_rows(path: Path) -> list[tuple[int, dict]]:
    """Read data rows from a CSV file."""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(2048)
        f.seek(0)
        try:
            dialect = csv.Sniffer().sniff(sample, delimiters=",;\t")
        except csv.Error:
            dialect = csv.excel
        reader = csv.reader(f, dialect)
        header = next(reader, None)
        if header is None:
            raise ValidationError("Import file is empty")
        return list(_normalize_rows(header, (tuple(r) for r in reader)))


def read_xlsx_rows(path: Path) -> list[tuple[int, dict]]:
    """Read data rows from the active sheet of an XLSX workbook."""
    workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
    try:
        sheet = workbook.active
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValidationError("Import file is empty")
        return list(_normalize_rows(list(header), rows))
    finally:
        workbook.close()


TEMPLATE_ROWS = (
    ("2024-01-15", "Staff salaries", "INV-101", "5200", "1100", 500000),
    ("2024-01-16", "Service revenue", "INV-102", "1200", "4100", 2500000),
)


def write_template(path: str | Path) -> Path:
    """Write an XLSX workbook with the import header and two sample rows."""
    path = Path(path)
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Transactions"
    sheet.append(COLUMNS)
    for row in TEMPLATE_ROWS:
        sheet.append(row)
    for letter, width in zip("ABCDEF", (12, 32, 14, 18, 18, 14)):
        sheet.column_dimensions[letter].width = width
    workbook.save(path)
    logger.info("import_template_written", extra={"path": str(path)})
    return path


class BulkImportService:
    """Service for importing many transactions from a spreadsheet."""

    def __init__(self, db: Database, journal_service: JournalService):
        """Initialize bulk import service.

        Args:
            db: Database instance
            journal_service: Journal engine that stores the batch
        """
        self.db = db
        self.journal_service = journal_service

    def read_rows(self, file_path: str | Path) -> list[tuple[int, dict]]:
        """Read numbered data rows from a CSV or XLSX file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the format is unsupported or columns are missing
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Import file not found: {file_path}")

        suffix = path.suffix.lower()
        if suffix in CSV_SUFFIXES:
            return read_csv_rows(path)
        if suffix in XLSX_SUFFIXES:
            return read_xlsx_rows(path)
        raise ValidationError(
            f"Unsupported import file type '{suffix}'. Use .csv or .xlsx"
        )

    def validate_rows(
        self, rows: list[tuple[int, dict]]
    ) -> tuple[list[TransactionPayload], list[str]]:
        """Turn rows into transaction payloads, collecting every row error.

        Returns:
            Tuple of (payloads for valid rows, error messages)
        """
        known_codes = {account.code for account in self.db.list_accounts()}
        payloads = []
        errors = []

        for row_number, row in rows:
            row_errors = []
            values = {name: _cell_text(row.get(name)) for name in COLUMNS}

            for name in REQUIRED_COLUMNS:
                if not values[name]:
                    row_errors.append(f"{name} is required")

            txn_date = None
            if values[DATE]:
                try:
                    txn_date = parse_date(row[DATE])
                except ValueError as e:
                    row_errors.append(str(e))

            amount = None
            if values[AMOUNT]:
                try:
                    amount = parse_amount(row[AMOUNT])
                except ValueError as e:
                    row_errors.append(str(e))
                else:
                    if amount <= 0:
                        row_errors.append("Amount must be a positive number")

            debit_code = values[DEBIT_ACCOUNT]
            credit_code = values[CREDIT_ACCOUNT]
            for code in (debit_code, credit_code):
                if code and code not in known_codes:
                    row_errors.append(f"Account code {code} does not exist")
            if debit_code and debit_code == credit_code:
                row_errors.append("Debit and credit account codes must differ")

            if row_errors:
                errors.extend(f"Row {row_number}: {message}" for message in row_errors)
                continue

            payloads.append(
                TransactionPayload(
                    date=txn_date,
                    description=values[DESCRIPTION],
                    reference=values[REFERENCE] or None,
                    entries=(
                        JournalEntry(account_code=debit_code, debit=amount),
                        JournalEntry(account_code=credit_code, credit=amount),
                    ),
                )
            )

        return payloads, errors

    def import_file(self, file_path: str | Path, dry_run: bool = False) -> ImportResult:
        """Import transactions from a CSV or XLSX file.

        Args:
            file_path: Path to the import file
            dry_run: Validate and build payloads without writing

        Returns:
            ImportResult; when ``errors`` is non-empty nothing was written

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the file cannot be read as an import file
            IntegrityError: If the batch was only partially stored
        """
        rows = self.read_rows(file_path)
        if not rows:
            raise ValidationError("Import file contains no data rows")

        payloads, errors = self.validate_rows(rows)
        result = ImportResult(rows=len(rows), payloads=payloads, errors=errors, dry_run=dry_run)
        if errors:
            logger.warning(
                "bulk_import_rejected",
                extra={"file": str(file_path), "errors": len(errors)},
            )
            return result
        if dry_run:
            return result

        result.transactions = self.journal_service.add_bulk_transactions(payloads)
        logger.info(
            "bulk_import_completed",
            extra={"file": str(file_path), "imported": result.imported},
        )
        return result
