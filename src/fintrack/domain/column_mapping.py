"""Header-based column detection.

Each logical field has an ordered list of lowercase substrings (English,
German, Spanish). Adding a locale means adding patterns here, not code.
"""

import logging
from dataclasses import replace
from typing import Mapping, Sequence

from fintrack.domain.entities import ColumnMapping, UNMAPPED

logger = logging.getLogger(__name__)

COLUMN_PATTERNS: dict[str, tuple[str, ...]] = {
    "date": ("date", "transaction date", "trans date", "posted date", "datum", "fecha"),
    "description": (
        "description",
        "desc",
        "merchant",
        "payee",
        "details",
        "beschreibung",
        "descripción",
        "verwendungszweck",
        "concepto",
    ),
    "amount": ("amount", "value", "debit", "charge", "betrag", "importe"),
    "source_category": ("category", "type", "kategorie", "categoría"),
    "notes": ("notes", "memo", "comment", "notizen", "notas"),
    "debit": ("debit", "withdrawal", "soll", "cargo"),
    "credit": ("credit", "deposit", "haben", "abono"),
}


def find_column(headers: Sequence[str], patterns: Sequence[str]) -> int:
    """Return the index of the first header containing the earliest matching pattern.

    Pattern order decides, not header order: with patterns ("category", "type")
    a "Category" column wins over an earlier "Type" column.
    """
    lower_headers = [header.strip().lower() for header in headers]
    for pattern in patterns:
        for index, header in enumerate(lower_headers):
            if pattern in header:
                return index
    return UNMAPPED


def auto_detect_mapping(
    headers: Sequence[str], patterns: Mapping[str, Sequence[str]] = COLUMN_PATTERNS
) -> ColumnMapping:
    """Guess a column mapping from CSV headers.

    Best effort: fields that cannot be found stay at -1 and the caller decides
    whether the mapping is usable.

    When both a debit and a credit column exist and the amount guess is
    missing or landed on one of them, the mapping switches to debit/credit
    mode. Otherwise the debit/credit guesses are dropped so that amount and
    the debit/credit pair never coexist.
    """
    detected = {field: find_column(headers, field_patterns) for field, field_patterns in patterns.items()}
    mapping = ColumnMapping(**detected)

    has_pair = (
        mapping.debit != UNMAPPED
        and mapping.credit != UNMAPPED
        and mapping.debit != mapping.credit
    )
    if has_pair and mapping.amount in (UNMAPPED, mapping.debit, mapping.credit):
        mapping = replace(mapping, amount=UNMAPPED)
    else:
        mapping = replace(mapping, debit=UNMAPPED, credit=UNMAPPED)

    logger.debug("Detected column mapping %s from headers %s", mapping.to_dict(), list(headers))
    return mapping
