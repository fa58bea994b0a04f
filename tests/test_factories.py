"""Tests for choosing the ledger file."""

from ledgerbook.database.factories import create_sqlite_database


def test_explicit_path_wins(tmp_path, monkeypatch):
    monkeypatch.setenv("LEDGERBOOK_DB_PATH", str(tmp_path / "env.db"))
    db = create_sqlite_database(str(tmp_path / "explicit.db"))
    assert db.database_url == f"sqlite:///{tmp_path / 'explicit.db'}"


def test_environment_variable(tmp_path, monkeypatch):
    monkeypatch.setenv("LEDGERBOOK_DB_PATH", str(tmp_path / "env.db"))
    db = create_sqlite_database()
    assert db.database_url == f"sqlite:///{tmp_path / 'env.db'}"


def test_default_location_is_created(tmp_path, monkeypatch):
    monkeypatch.delenv("LEDGERBOOK_DB_PATH", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    db = create_sqlite_database()
    assert db.database_url == f"sqlite:///{tmp_path / '.ledgerbook' / 'ledgerbook.db'}"
    assert (tmp_path / ".ledgerbook").is_dir()
