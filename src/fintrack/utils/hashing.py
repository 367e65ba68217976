"""Duplicate-detection fingerprints for imported transactions."""

import hashlib
from decimal import Decimal

from fintrack.utils.amount_parser import format_amount

HASH_LENGTH = 16


def transaction_hash(source_id: int, iso_date: str, description: str, amount: Decimal) -> str:
    """Generate a stable transaction hash for duplicate detection.

    The fingerprint is the first 16 hex characters of the SHA-256 digest of
    "source_id|date|description|amount", with the amount fixed to two
    decimals. The sign is part of the payload, so a charge and a refund of the
    same size never collide.

    Amounts are rounded half-up on the exact decimal value, so 1.005 hashes as
    "1.01". Binary-float formatting would give "1.00" for the same input, and
    hashes built that way will not match for such half-cent amounts.

    Args:
        source_id: Source the transaction was imported from
        iso_date: Transaction date as "YYYY-MM-DD"
        description: Transaction description
        amount: Signed amount (negative = money out)

    Returns:
        16-character lowercase hex string
    """
    payload = f"{source_id}|{iso_date}|{description}|{format_amount(amount)}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:HASH_LENGTH]
