"""Construction of the ledger store used by the CLI and tests."""

import os
from pathlib import Path
from typing import Optional

from ledgerbook.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "LEDGERBOOK_DB_PATH"


def default_database_path() -> Path:
    """Location of the ledger file when nothing else is configured."""
    return Path.home() / ".ledgerbook" / "ledgerbook.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the SQLite ledger file.

    The file is chosen from, in order: the explicit path, the
    LEDGERBOOK_DB_PATH environment variable, and ~/.ledgerbook/ledgerbook.db.
    The directory for the default location is created on first use.
    """
    path = database_path or os.environ.get(DB_PATH_ENV)
    if path is None:
        default = default_database_path()
        default.parent.mkdir(parents=True, exist_ok=True)
        path = str(default)

    return SQLAlchemyDatabase(f"sqlite:///{path}")
