"""Shared domain error messages and error types."""

from typing import Any, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class EmptyFileError(ValidationError):
    """The CSV content is empty; nothing can be imported."""

    def __init__(self, message: str = "File is empty"):
        super().__init__(message)


class ColumnMappingError(ValidationError):
    """Required columns could not be detected and no manual mapping was given."""

    def __init__(self, message: str, headers: list[str], mapping: Any):
        super().__init__(message)
        self.headers = headers
        self.mapping = mapping


class NoValidTransactionsError(ValidationError):
    """Every row of the file was rejected."""

    def __init__(self, errors: list[str]):
        super().__init__("No valid transactions found in file")
        self.errors = errors


def missing_required_fields(line_number: int) -> str:
    """Return row error for a row without date, description or amount."""
    return f"Line {line_number}: Missing required fields (date, description, or amount)"


def invalid_amount(line_number: int, raw: str) -> str:
    """Return row error for an unparseable amount."""
    return f"Line {line_number}: Invalid amount: {raw}"


def invalid_date(line_number: int, raw: str) -> str:
    """Return row error for an unparseable date."""
    return f"Line {line_number}: Invalid date: {raw}"


def ambiguous_debit_credit(line_number: int, debit: str, credit: str) -> str:
    """Return row error for a row with both debit and credit populated."""
    return f"Line {line_number}: Both debit and credit have values: {debit} / {credit}"


def unmapped_columns(missing: list[str]) -> str:
    """Return message for an auto-detected mapping with missing fields."""
    return (
        "Could not auto-detect required columns "
        f"({', '.join(missing)}). Please provide manual mapping."
    )


def source_not_found(source_id: int) -> str:
    """Return message for missing source."""
    return f"Source {source_id} not found"


def unit_not_found(unit_id: int) -> str:
    """Return message for missing unit."""
    return f"Unit {unit_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def rule_not_found(kind: str, rule_id: int) -> str:
    """Return message for missing unit or category rule."""
    return f"{kind.capitalize()} rule {rule_id} not found"


def invalid_choice(field: str, value: Optional[str], choices: tuple[str, ...]) -> str:
    """Return message for a value outside an allowed set."""
    return f"Invalid {field} '{value}'. Must be one of: {', '.join(choices)}"
