"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
from pathlib import Path
import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.csv_import import CSVImportService
from fintrack.domain.csv_parser import CSVParser
from fintrack.domain.entities import ColumnMapping
from fintrack.domain.reference import ReferenceService
from fintrack.domain.rule_service import RuleService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def parser():
    """Create a CSVParser with default options."""
    return CSVParser()


@pytest.fixture
def basic_mapping():
    """Mapping for a Date,Description,Amount file."""
    return ColumnMapping(date=0, description=1, amount=2)


@pytest.fixture
def reference_service(temp_db):
    """Create a ReferenceService with a temporary database."""
    return ReferenceService(temp_db)


@pytest.fixture
def rule_service(temp_db):
    """Create a RuleService with a temporary database."""
    return RuleService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def sample_source(reference_service):
    """Create a sample source for testing."""
    source_id = reference_service.create_source(name="Test Bank", source_type="bank")
    return reference_service.get_source(source_id)


@pytest.fixture
def sample_units(reference_service):
    """Create sample units and return their IDs by name."""
    return {
        name: reference_service.create_unit(name=name)
        for name in ("Household", "Business")
    }


@pytest.fixture
def sample_categories(reference_service):
    """Create sample categories and return their IDs by name."""
    category_ids = {}
    for name in ("Groceries", "Dining", "Income", "Shopping"):
        category_ids[name] = reference_service.create_category(name=name)
    return category_ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
