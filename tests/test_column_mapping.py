"""Tests for header-based column detection."""

from fintrack.domain.column_mapping import auto_detect_mapping, find_column, COLUMN_PATTERNS
from fintrack.domain.entities import ColumnMapping


def test_detect_common_column_names():
    """Test detection of common English headers."""
    mapping = auto_detect_mapping(["Transaction Date", "Merchant Description", "Amount"])

    assert mapping.date == 0
    assert mapping.description == 1
    assert mapping.amount == 2
    assert mapping.source_category == -1
    assert mapping.notes == -1


def test_detect_case_insensitive():
    """Test that header case doesn't matter."""
    mapping = auto_detect_mapping(["DATE", "DESCRIPTION", "AMOUNT", "CATEGORY", "NOTES"])

    assert mapping == ColumnMapping(date=0, description=1, amount=2, source_category=3, notes=4)


def test_detect_german_headers():
    """Test detection of German headers."""
    mapping = auto_detect_mapping(["Datum", "Beschreibung", "Betrag", "Kategorie", "Notizen"])

    assert mapping == ColumnMapping(date=0, description=1, amount=2, source_category=3, notes=4)


def test_detect_spanish_headers():
    """Test detection of Spanish headers."""
    mapping = auto_detect_mapping(["Fecha", "Descripción", "Importe", "Notas"])

    assert mapping.date == 0
    assert mapping.description == 1
    assert mapping.amount == 2
    assert mapping.notes == 3


def test_undetected_columns():
    """Test that unknown headers stay unmapped."""
    mapping = auto_detect_mapping(["Column1", "Column2", "Column3"])

    assert mapping.date == -1
    assert mapping.description == -1
    assert mapping.amount == -1
    assert mapping.missing_required_fields() == ["date", "description", "amount"]


def test_pattern_order_beats_header_order():
    """Test that the earliest pattern wins even if its header comes later."""
    mapping = auto_detect_mapping(["Date", "Description", "Amount", "Type", "Category"])

    assert mapping.source_category == 4


def test_headers_with_whitespace():
    """Test that padded headers are still matched."""
    mapping = auto_detect_mapping(["  Date  ", " Description ", "Amount", "  Category  "])

    assert mapping == ColumnMapping(date=0, description=1, amount=2, source_category=3)


def test_detect_debit_credit_columns():
    """Test that a Debit/Credit pair replaces the amount column."""
    headers = ["Transaction Date", "Posted Date", "Card No.", "Description", "Category", "Debit", "Credit"]
    mapping = auto_detect_mapping(headers)

    assert mapping.date == 0
    assert mapping.description == 3
    assert mapping.source_category == 4
    assert mapping.amount == -1
    assert mapping.debit == 5
    assert mapping.credit == 6
    assert mapping.uses_debit_credit
    assert mapping.is_complete


def test_amount_column_wins_over_debit_credit():
    """Test that an explicit amount column keeps debit/credit unmapped."""
    mapping = auto_detect_mapping(["Date", "Description", "Amount", "Debit", "Credit"])

    assert mapping.amount == 2
    assert mapping.debit == -1
    assert mapping.credit == -1
    assert not mapping.uses_debit_credit


def test_lone_debit_column_is_amount():
    """Test that a single Debit column is used as the amount."""
    mapping = auto_detect_mapping(["Date", "Description", "Debit"])

    assert mapping.amount == 2
    assert mapping.debit == -1


def test_find_column():
    """Test the single-field lookup helper."""
    assert find_column(["Posted Date", "Memo"], COLUMN_PATTERNS["notes"]) == 1
    assert find_column(["Posted Date", "Memo"], ("payee",)) == -1


def test_custom_pattern_table():
    """Test that new locales are data, not code."""
    patterns = dict(COLUMN_PATTERNS)
    patterns["date"] = COLUMN_PATTERNS["date"] + ("data",)
    patterns["description"] = COLUMN_PATTERNS["description"] + ("descrizione",)
    patterns["amount"] = COLUMN_PATTERNS["amount"] + ("importo",)

    mapping = auto_detect_mapping(["Data", "Descrizione", "Importo"], patterns)

    assert mapping == ColumnMapping(date=0, description=1, amount=2)


def test_empty_headers():
    """Test that no headers means nothing is mapped."""
    assert auto_detect_mapping([]) == ColumnMapping()
