"""Tests for source, unit and category management."""

import pytest

from fintrack.cli.main import cli
from fintrack.domain.errors import NotFoundError, ValidationError


class TestReferenceService:
    """Tests for the reference data service."""

    def test_create_source(self, reference_service):
        source_id = reference_service.create_source("  Chase Checking ", "bank")

        source = reference_service.get_source(source_id)
        assert source.name == "Chase Checking"
        assert source.type == "bank"

    @pytest.mark.parametrize("name,source_type", [("", "bank"), ("Card", "savings")])
    def test_create_source_validation(self, reference_service, name, source_type):
        with pytest.raises(ValidationError):
            reference_service.create_source(name, source_type)

    def test_require_source(self, reference_service):
        with pytest.raises(NotFoundError, match="Source 42 not found"):
            reference_service.require_source(42)

    def test_create_unit_defaults(self, reference_service):
        unit_id = reference_service.create_unit("Household")

        unit = reference_service.list_units()[0]
        assert unit.id == unit_id
        assert unit.color == "#6b7280"
        assert unit.active is True

    def test_create_subcategory(self, reference_service, sample_categories):
        child_id = reference_service.create_category("Supermarket", parent_id=sample_categories["Groceries"])

        child = next(c for c in reference_service.list_categories() if c.id == child_id)
        assert child.parent_id == sample_categories["Groceries"]

    def test_create_category_missing_parent(self, reference_service):
        with pytest.raises(NotFoundError, match="Category 99 not found"):
            reference_service.create_category("Orphan", parent_id=99)


def test_source_add_and_list(cli_runner, temp_db):
    """Test creating and listing sources."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "source", "add", "Amex Gold", "--type", "credit_card"]
    )
    assert result.exit_code == 0
    assert "Created source 'Amex Gold' (ID: 1)" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "source", "list"])
    assert result.exit_code == 0
    assert "Amex Gold" in result.output
    assert "credit_card" in result.output


def test_source_list_empty(cli_runner, temp_db):
    """Test listing with no sources."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "source", "list"])

    assert result.exit_code == 0
    assert "No sources found." in result.output


def test_unit_add_and_list(cli_runner, temp_db):
    """Test creating and listing units."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "unit", "add", "Business", "--color", "#ff0000"]
    )
    assert result.exit_code == 0
    assert "Created unit 'Business'" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "unit", "list"])
    assert "Business" in result.output


def test_category_add_with_parent(cli_runner, temp_db, sample_categories):
    """Test creating a subcategory from the CLI."""
    parent_id = sample_categories["Dining"]
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "category", "add", "Coffee", "--parent", str(parent_id)],
    )

    assert result.exit_code == 0
    assert f"under category {parent_id}" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])
    assert "Coffee" in result.output
    assert f"Parent: {parent_id}" in result.output


def test_category_add_missing_parent(cli_runner, temp_db):
    """Test that an unknown parent is reported."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "category", "add", "Coffee", "--parent", "99"]
    )

    assert result.exit_code == 1
    assert "Category 99 not found" in result.output
