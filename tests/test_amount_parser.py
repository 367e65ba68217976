"""Tests for amount parsing and debit/credit consolidation."""

import pytest
from decimal import Decimal

from fintrack.utils.amount_parser import (
    parse_amount,
    format_amount,
    consolidate_debit_credit,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("123.45", Decimal("123.45")),
        ("-123.45", Decimal("-123.45")),
        ("$45.50", Decimal("45.50")),
        ("-$45.50", Decimal("-45.50")),
        ("£30.00", Decimal("30.00")),
        ("¥1000", Decimal("1000")),
        ("€1,234.56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("1.234,56", Decimal("1234.56")),
        ("999,99", Decimal("999.99")),
        ("1,234,567", Decimal("1234567")),
        ("1.234.567", Decimal("1234567")),
        ("(100.00)", Decimal("-100.00")),
        ("($1,000.00)", Decimal("-1000.00")),
        ("  42  ", Decimal("42")),
        ("1 234,56 €", Decimal("1234.56")),
        ("0", Decimal("0")),
        ("0.00", Decimal("0")),
    ],
)
def test_parse_amount_formats(raw, expected):
    """Test parsing US, European and symbol-decorated amounts."""
    assert parse_amount(raw) == expected


def test_parse_amount_returns_decimal():
    """Test that amounts come back as Decimal."""
    assert isinstance(parse_amount("12.34"), Decimal)


@pytest.mark.parametrize("raw", ["invalid", "", "   ", "12abc", "1.2.3,4,5", "NaN", "Infinity", "1e5", "--5"])
def test_parse_amount_invalid(raw):
    """Test that unparseable amounts raise instead of defaulting to zero."""
    with pytest.raises(ValueError):
        parse_amount(raw)


def test_parse_amount_error_mentions_value():
    """Test that the error message includes the raw value."""
    with pytest.raises(ValueError, match="abc"):
        parse_amount("abc")


@pytest.mark.parametrize("raw", ["1234.56", "-0.5", "(100.00)", "€1,234.56", "1.234,56"])
def test_parse_amount_roundtrip(raw):
    """Formatting a parsed amount and parsing it again gives the same value."""
    value = parse_amount(raw)
    assert parse_amount(format_amount(value)) == value


def test_format_amount():
    """Test two-decimal formatting."""
    assert format_amount(Decimal("100")) == "100.00"
    assert format_amount(Decimal("-45.5")) == "-45.50"
    assert format_amount(Decimal("1.005")) == "1.01"
    assert format_amount(Decimal("-0")) == "0.00"


class TestConsolidateDebitCredit:
    """Tests for merging debit and credit columns."""

    def test_debit_becomes_negative(self):
        """Test that a debit is money out."""
        assert consolidate_debit_credit("65.32", "") == Decimal("-65.32")

    def test_credit_stays_positive(self):
        """Test that a credit is money in."""
        assert consolidate_debit_credit("", "1427.36") == Decimal("1427.36")

    def test_negative_debit_is_still_money_out(self):
        """Test that a debit written with a sign is treated as a magnitude."""
        assert consolidate_debit_credit("-65.32", None) == Decimal("-65.32")

    def test_both_blank(self):
        """Test that a row without either value has no amount."""
        assert consolidate_debit_credit("", "  ") is None
        assert consolidate_debit_credit(None, None) is None

    def test_zero_is_valid(self):
        """Test that zero is an amount, not a missing value."""
        assert consolidate_debit_credit("0.00", "") == Decimal("0")
        assert consolidate_debit_credit("", "0") == Decimal("0")

    def test_both_populated_rejected(self):
        """Test that a row with both values is rejected."""
        with pytest.raises(ValueError, match="Both debit and credit"):
            consolidate_debit_credit("10.00", "5.00")

    def test_invalid_debit(self):
        """Test that an invalid debit value raises."""
        with pytest.raises(ValueError):
            consolidate_debit_credit("abc", "")

    def test_european_credit(self):
        """Test that consolidation uses the locale-aware amount parser."""
        assert consolidate_debit_credit("", "1.427,36") == Decimal("1427.36")
