"""SQLAlchemy models for ledgerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(18, 2)


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    balance = Column(MONEY, nullable=False, default=0)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Journal transaction header model."""

    __tablename__ = "transactions"

    # Assigned by the client, never auto-generated
    id = Column(String, primary_key=True, autoincrement=False)
    date = Column(Date, nullable=False, index=True)
    reference = Column(String, nullable=True)
    description = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship(
        "JournalEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="JournalEntry.id",
    )


class JournalEntry(Base):
    """Journal entry line model."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(
        String, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Plain column: accounts may be removed while historic entries still name them
    account_code = Column(String, nullable=False, index=True)
    debit = Column(MONEY, nullable=False, default=0)
    credit = Column(MONEY, nullable=False, default=0)

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")


class Asset(Base):
    """Fixed asset model."""

    __tablename__ = "assets"

    id = Column(String, primary_key=True, autoincrement=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, default="")
    cost = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    is_depreciable = Column(Boolean, default=False, nullable=False)
    life = Column(Integer, nullable=True)
    residual = Column(MONEY, nullable=False, default=0)
    method = Column(String, nullable=True)
    accumulated_depreciation = Column(MONEY, nullable=False, default=0)
    last_depreciation_date = Column(Date, nullable=True)


class CompanySettings(Base):
    """Company settings singleton (id is always 1)."""

    __tablename__ = "company_settings"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    npwp = Column(String, nullable=False, default="")
    business_type = Column(String, nullable=False, default="")
    currency = Column(String, nullable=False, default="IDR")
    tax_year = Column(String, nullable=False, default="")
    period_start = Column(Date, nullable=True)
    website = Column(String, nullable=False, default="")
    owner = Column(String, nullable=False, default="")
    description = Column(String, nullable=False, default="")


class TaxSettings(Base):
    """Tax settings singleton (id is always 1)."""

    __tablename__ = "tax_settings"

    id = Column(Integer, primary_key=True)
    enable_income_tax = Column(Boolean, nullable=False, default=False)
    corporate_tax_rate = Column(Numeric(5, 2), nullable=False, default=25)
    tax_calculation_basis = Column(String, nullable=False, default="income-before-tax")
    minimum_taxable_income = Column(MONEY, nullable=False, default=0)
    round_tax_amount = Column(Boolean, nullable=False, default=True)
    tax_expense_account = Column(String, nullable=False, default="5500")
    tax_payable_account = Column(String, nullable=False, default="2300")
    auto_create_tax_entry = Column(Boolean, nullable=False, default=False)


SETTINGS_ROW_ID = 1


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)

    if engine.dialect.name == "sqlite":
        # SQLite only honours ON DELETE CASCADE with foreign keys switched on
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
