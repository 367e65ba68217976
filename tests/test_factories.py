"""Tests for database path resolution."""

from pathlib import Path

from fintrack.database.factories import DB_PATH_ENV, create_sqlite_database, resolve_database_path


def test_explicit_path_wins(tmp_path, monkeypatch):
    """Test that an explicit path beats the environment variable."""
    monkeypatch.setenv(DB_PATH_ENV, str(tmp_path / "env.db"))

    assert resolve_database_path(str(tmp_path / "explicit.db")) == tmp_path / "explicit.db"


def test_environment_variable(tmp_path, monkeypatch):
    """Test that $FINTRACK_DB_PATH is used when no path is given."""
    monkeypatch.setenv(DB_PATH_ENV, str(tmp_path / "env.db"))

    assert resolve_database_path() == tmp_path / "env.db"


def test_default_under_home(tmp_path, monkeypatch):
    """Test the ~/.fintrack fallback and that its directory is created."""
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    path = resolve_database_path()

    assert path == tmp_path / ".fintrack" / "fintrack.db"
    assert path.parent.is_dir()


def test_creates_nested_parent(tmp_path):
    """Test that missing parent directories are created."""
    path = resolve_database_path(str(tmp_path / "a" / "b" / "fintrack.db"))

    assert path.parent.is_dir()
    assert not path.exists()


def test_create_sqlite_database_url(tmp_path):
    """Test that the database points at the resolved file."""
    db = create_sqlite_database(str(tmp_path / "x.db"))

    assert db.database_url == f"sqlite:///{Path(tmp_path / 'x.db')}"
