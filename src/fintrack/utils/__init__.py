"""Utility functions for fintrack."""

from fintrack.utils.date_parser import parse_date
from fintrack.utils.amount_parser import parse_amount, format_amount, consolidate_debit_credit
from fintrack.utils.hashing import transaction_hash

__all__ = [
    "parse_date",
    "parse_amount",
    "format_amount",
    "consolidate_debit_credit",
    "transaction_hash",
]
