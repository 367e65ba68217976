"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema. Import-pipeline values (mappings, parsed rows, rules) are
immutable and live only for the duration of one import request.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from fintrack.utils.amount_parser import format_amount

UNMAPPED = -1


@dataclass(frozen=True)
class Source:
    """Account or card the transactions are imported from."""

    id: int
    name: str
    type: str
    created_at: datetime


@dataclass(frozen=True)
class Unit:
    """Budget bucket a transaction belongs to."""

    id: int
    name: str
    color: str
    description: Optional[str]
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity with optional parent."""

    id: int
    name: str
    parent_id: Optional[int]
    color: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Persisted transaction."""

    id: int
    source_id: int
    date: str
    description: str
    amount: Decimal
    hash: Optional[str]
    unit_id: Optional[int]
    category_id: Optional[int]
    source_category: Optional[str]
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Rule:
    """Auto-categorization rule.

    target_id is a unit id for unit rules and a category id for category rules.
    Lower priority numbers are evaluated first.
    """

    id: int
    rule_type: str
    pattern: str
    match_type: str
    target_id: int
    priority: int
    active: bool = True


@dataclass(frozen=True)
class ImportLog:
    """Record of one import request."""

    id: int
    source_id: int
    file_name: Optional[str]
    transactions_added: int
    transactions_skipped: int
    status: str
    metadata: dict[str, Any]
    created_at: datetime


@dataclass(frozen=True)
class ParserOptions:
    """CSV parser configuration."""

    delimiter: str = ","
    has_header: bool = True


@dataclass(frozen=True)
class ColumnMapping:
    """Logical transaction field -> 0-based column index (-1 = not mapped).

    Either amount is mapped, or at least one of debit/credit is.
    """

    date: int = UNMAPPED
    description: int = UNMAPPED
    amount: int = UNMAPPED
    source_category: int = UNMAPPED
    notes: int = UNMAPPED
    debit: int = UNMAPPED
    credit: int = UNMAPPED

    @property
    def uses_debit_credit(self) -> bool:
        return self.amount == UNMAPPED and (
            self.debit != UNMAPPED or self.credit != UNMAPPED
        )

    def missing_required_fields(self) -> list[str]:
        missing = []
        if self.date == UNMAPPED:
            missing.append("date")
        if self.description == UNMAPPED:
            missing.append("description")
        if self.amount == UNMAPPED and self.debit == UNMAPPED and self.credit == UNMAPPED:
            missing.append("amount")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_required_fields()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColumnMapping":
        """Build a mapping from user input.

        Accepts snake_case or camelCase ("sourceCategory") keys; missing,
        None and blank values mean "not mapped".
        """
        values = {}
        for f in fields(cls):
            camel = "sourceCategory" if f.name == "source_category" else f.name
            raw = data.get(f.name, data.get(camel))
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                continue
            try:
                values[f.name] = int(raw)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid column index for '{f.name}': {raw}")
        return cls(**values)

    def to_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ParsedTransaction:
    """Normalized CSV row ready for persistence."""

    date: str
    description: str
    amount: Decimal
    hash: str
    source_category: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "date": self.date,
            "description": self.description,
            "amount": format_amount(self.amount),
            "hash": self.hash,
        }
        if self.source_category is not None:
            data["source_category"] = self.source_category
        if self.notes is not None:
            data["notes"] = self.notes
        return data


@dataclass(frozen=True)
class ParseResult:
    """Valid rows plus one human-readable error per rejected row."""

    transactions: list[ParsedTransaction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Classification:
    """Unit and category suggested by the rules (None = no rule matched)."""

    unit_id: Optional[int] = None
    category_id: Optional[int] = None
