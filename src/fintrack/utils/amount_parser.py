"""Amount parsing utilities."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import re

_CURRENCY_AND_SPACE = re.compile(r"[$£€¥\s]")
_PLAIN_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")
_CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles US and European notations:
    - "123.45", "-123.45", "$123.45", "€1,234.56"
    - "1.234,56" (European thousands dot, decimal comma)
    - "999,99" (single comma is a decimal separator)
    - "1,234,567" / "1.234.567" (repeated separator is a thousands separator)
    - "(123.45)" (negative in parentheses)

    When both separators are present, whichever occurs last is the decimal
    separator.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount (zero is a valid result)

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_AND_SPACE.sub("", amount_str)

    # Handle parentheses notation (negative)
    if cleaned.startswith("(") and cleaned.endswith(")"):
        cleaned = "-" + cleaned[1:-1]

    dots = cleaned.count(".")
    commas = cleaned.count(",")

    if dots and commas:
        if cleaned.rfind(",") > cleaned.rfind("."):
            # European format: 1.234,56
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            # US format: 1,234.56
            cleaned = cleaned.replace(",", "")
    elif commas == 1:
        cleaned = cleaned.replace(",", ".")
    elif commas > 1:
        cleaned = cleaned.replace(",", "")
    elif dots > 1:
        cleaned = cleaned.replace(".", "")

    if not _PLAIN_DECIMAL.match(cleaned):
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")

    return Decimal(cleaned)


def format_amount(amount: Decimal) -> str:
    """Format an amount with exactly two decimals, rounding half up.

    Negative zero is rendered as "0.00".
    """
    quantized = Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if quantized == 0:
        quantized = abs(quantized)
    return f"{quantized:.2f}"


def consolidate_debit_credit(
    debit_str: Optional[str], credit_str: Optional[str]
) -> Optional[Decimal]:
    """Merge a debit cell and a credit cell into one signed amount.

    A debit is money out and always comes back negative; a credit is money in
    and is kept as written. The two columns are mutually exclusive per row.

    Args:
        debit_str: Raw debit cell (may be blank or None)
        credit_str: Raw credit cell (may be blank or None)

    Returns:
        Signed Decimal amount, or None when both cells are blank

    Raises:
        ValueError: If both cells are populated or the populated cell is not
            a valid amount
    """
    has_debit = bool(debit_str and debit_str.strip())
    has_credit = bool(credit_str and credit_str.strip())

    if has_debit and has_credit:
        raise ValueError(
            f"Both debit and credit have values: {debit_str.strip()} / {credit_str.strip()}"
        )
    if has_debit:
        return -abs(parse_amount(debit_str))
    if has_credit:
        return parse_amount(credit_str)
    return None
