"""Tests for rule commands."""

from fintrack.cli.main import cli


def invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "rule", *args])


def test_rule_add_and_list(cli_runner, temp_db, sample_categories):
    """Test creating and listing category rules."""
    target = sample_categories["Groceries"]

    result = invoke(cli_runner, temp_db, "add", "WALMART", str(target))
    assert result.exit_code == 0
    assert f"Created category rule 1: description contains 'WALMART' -> {target}" in result.output

    result = invoke(cli_runner, temp_db, "list")
    assert result.exit_code == 0
    assert "Category rules:" in result.output
    assert "'WALMART'" in result.output


def test_rule_add_unit_rule(cli_runner, temp_db, sample_units):
    """Test creating a unit rule on the source field."""
    result = invoke(
        cli_runner,
        temp_db,
        "add",
        "1",
        str(sample_units["Business"]),
        "--kind",
        "unit",
        "--field",
        "source",
        "--match",
        "exact",
    )

    assert result.exit_code == 0
    assert "Created unit rule" in result.output


def test_rule_add_invalid_field_for_kind(cli_runner, temp_db, sample_units):
    """Test that unit rules reject the source_category field."""
    result = invoke(
        cli_runner, temp_db, "add", "Dining", str(sample_units["Business"]), "--kind", "unit", "--field", "source_category"
    )

    assert result.exit_code == 1
    assert "Invalid rule type" in result.output


def test_rule_add_invalid_regex(cli_runner, temp_db, sample_categories):
    """Test that a broken regex is rejected up front."""
    result = invoke(cli_runner, temp_db, "add", "([bad", str(sample_categories["Dining"]), "--match", "regex")

    assert result.exit_code == 1
    assert "Invalid regex pattern" in result.output


def test_rule_add_missing_target(cli_runner, temp_db):
    """Test that the target category must exist."""
    result = invoke(cli_runner, temp_db, "add", "WALMART", "99")

    assert result.exit_code == 1
    assert "Category 99 not found" in result.output


def test_rule_list_empty(cli_runner, temp_db):
    """Test listing with no rules."""
    result = invoke(cli_runner, temp_db, "list", "--kind", "unit")

    assert result.exit_code == 0
    assert "No unit rules found." in result.output


def test_rule_toggle_and_test(cli_runner, temp_db, rule_service, sample_categories):
    """Test that a deactivated rule stops matching."""
    target = sample_categories["Groceries"]
    rule_id = rule_service.create_rule("category", "description", "WALMART", "contains", target)

    result = invoke(cli_runner, temp_db, "test", "WALMART STORE #123")
    assert f"Category: {target}" in result.output

    result = invoke(cli_runner, temp_db, "toggle", str(rule_id))
    assert result.exit_code == 0
    assert f"Category rule {rule_id} deactivated" in result.output

    result = invoke(cli_runner, temp_db, "test", "WALMART STORE #123")
    assert "Category: none" in result.output
    assert "Unit: none" in result.output


def test_rule_priority(cli_runner, temp_db, rule_service, sample_categories):
    """Test that reprioritizing changes the winning rule."""
    rule_service.create_rule("category", "description", "WAL", "contains", sample_categories["Shopping"])
    specific = rule_service.create_rule("category", "description", "WALMART", "contains", sample_categories["Groceries"])

    result = invoke(cli_runner, temp_db, "priority", str(specific), "0")
    assert result.exit_code == 0
    assert "priority set to 0" in result.output

    result = invoke(cli_runner, temp_db, "test", "WALMART STORE")
    assert f"Category: {sample_categories['Groceries']}" in result.output


def test_rule_test_source_category(cli_runner, temp_db, rule_service, sample_categories):
    """Test matching on the bank-provided category."""
    rule_service.create_rule("category", "source_category", "Dining", "exact", sample_categories["Dining"])

    result = invoke(cli_runner, temp_db, "test", "TST*MISS ADA", "--source-category", "dining")

    assert f"Category: {sample_categories['Dining']}" in result.output


def test_rule_delete(cli_runner, temp_db, rule_service, sample_categories):
    """Test deleting rules, including unknown ones."""
    rule_id = rule_service.create_rule("category", "description", "A", "contains", sample_categories["Dining"])

    result = invoke(cli_runner, temp_db, "delete", str(rule_id))
    assert result.exit_code == 0
    assert f"Deleted category rule {rule_id}" in result.output

    result = invoke(cli_runner, temp_db, "delete", str(rule_id))
    assert result.exit_code == 1
    assert f"Category rule {rule_id} not found" in result.output
