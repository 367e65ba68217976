"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fintrack.domain.entities import (
    Source,
    Unit,
    Category,
    Transaction,
    Rule,
    ImportLog,
)

RULE_KINDS = ("unit", "category")


class Database(ABC):
    """Abstract database interface for fintrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Source operations
    @abstractmethod
    def create_source(self, name: str, source_type: str) -> int:
        """Create a new source. Returns source ID."""
        pass

    @abstractmethod
    def get_source(self, source_id: int) -> Optional[Source]:
        """Get source by ID."""
        pass

    @abstractmethod
    def list_sources(self) -> list[Source]:
        """List all sources."""
        pass

    # Unit operations
    @abstractmethod
    def create_unit(self, name: str, color: str, description: Optional[str] = None) -> int:
        """Create a new unit. Returns unit ID."""
        pass

    @abstractmethod
    def get_unit(self, unit_id: int) -> Optional[Unit]:
        """Get unit by ID."""
        pass

    @abstractmethod
    def list_units(self) -> list[Unit]:
        """List all units."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, color: str, parent_id: Optional[int] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        source_id: int,
        date: str,
        description: str,
        amount: Decimal,
        hash: Optional[str] = None,
        unit_id: Optional[int] = None,
        category_id: Optional[int] = None,
        source_category: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_by_hash(self, hash: str) -> Optional[Transaction]:
        """Get the first transaction stored with the given dedup hash."""
        pass

    @abstractmethod
    def list_transactions(self, source_id: Optional[int] = None) -> list[Transaction]:
        """List transactions, optionally filtered by source."""
        pass

    # Rule operations (kind is "unit" or "category")
    @abstractmethod
    def create_rule(
        self,
        kind: str,
        rule_type: str,
        pattern: str,
        match_type: str,
        target_id: int,
        priority: int,
        active: bool = True,
    ) -> int:
        """Create a unit or category rule. Returns rule ID."""
        pass

    @abstractmethod
    def get_rule(self, kind: str, rule_id: int) -> Optional[Rule]:
        """Get rule by ID."""
        pass

    @abstractmethod
    def list_rules(self, kind: str, active_only: bool = False) -> list[Rule]:
        """List rules ordered by ascending priority, then ID."""
        pass

    @abstractmethod
    def update_rule(
        self,
        kind: str,
        rule_id: int,
        priority: Optional[int] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update rule priority and/or active flag."""
        pass

    @abstractmethod
    def delete_rule(self, kind: str, rule_id: int) -> None:
        """Delete a rule."""
        pass

    # Import log operations
    @abstractmethod
    def create_import_log(
        self,
        source_id: int,
        file_name: Optional[str],
        transactions_added: int,
        transactions_skipped: int,
        status: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> int:
        """Record an import. Returns import log ID."""
        pass

    @abstractmethod
    def get_import_log(self, import_log_id: int) -> Optional[ImportLog]:
        """Get import log entry by ID."""
        pass
