"""Rule management domain service."""

import re
from typing import Optional, Sequence

from fintrack.database.base import Database, RULE_KINDS
from fintrack.domain import errors
from fintrack.domain.entities import Classification, Rule
from fintrack.domain.errors import NotFoundError, ValidationError
from fintrack.domain.rules import (
    CATEGORY_RULE_TYPES,
    MATCH_TYPES,
    UNIT_RULE_TYPES,
    RuleEngine,
)


class RuleService:
    """Service for managing unit and category rules."""

    def __init__(self, db: Database):
        """Initialize rule service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_kind(self, kind: str) -> None:
        if kind not in RULE_KINDS:
            raise ValidationError(errors.invalid_choice("rule kind", kind, RULE_KINDS))

    def create_rule(
        self,
        kind: str,
        rule_type: str,
        pattern: str,
        match_type: str,
        target_id: int,
        priority: Optional[int] = None,
        active: bool = True,
    ) -> int:
        """Create a unit or category rule.

        Args:
            kind: "unit" or "category"
            rule_type: Field to test ("description", "source" for unit rules,
                "source_category" for category rules)
            pattern: Pattern text (a regular expression for match_type "regex")
            match_type: "contains", "exact", "starts_with" or "regex"
            target_id: Unit ID or category ID to assign on match
            priority: Evaluation order (lower first); defaults to after the
                last existing rule
            active: Whether the rule takes part in matching

        Returns:
            Rule ID

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If the target unit or category doesn't exist
        """
        self._check_kind(kind)

        rule_types = UNIT_RULE_TYPES if kind == "unit" else CATEGORY_RULE_TYPES
        if rule_type not in rule_types:
            raise ValidationError(errors.invalid_choice("rule type", rule_type, rule_types))
        if match_type not in MATCH_TYPES:
            raise ValidationError(errors.invalid_choice("match type", match_type, MATCH_TYPES))
        if not pattern or not pattern.strip():
            raise ValidationError("Rule pattern is required")
        if match_type == "regex":
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValidationError(f"Invalid regex pattern '{pattern}': {e}")

        if kind == "unit" and self.db.get_unit(target_id) is None:
            raise NotFoundError(errors.unit_not_found(target_id))
        if kind == "category" and self.db.get_category(target_id) is None:
            raise NotFoundError(errors.category_not_found(target_id))

        if priority is None:
            existing = self.db.list_rules(kind)
            priority = max((r.priority for r in existing), default=0) + 1

        return self.db.create_rule(
            kind=kind,
            rule_type=rule_type,
            pattern=pattern,
            match_type=match_type,
            target_id=target_id,
            priority=priority,
            active=active,
        )

    def get_rule(self, kind: str, rule_id: int) -> Rule:
        """Get a rule or raise NotFoundError."""
        self._check_kind(kind)
        rule = self.db.get_rule(kind, rule_id)
        if rule is None:
            raise NotFoundError(errors.rule_not_found(kind, rule_id))
        return rule

    def list_rules(self, kind: str, active_only: bool = False) -> list[Rule]:
        """List rules in evaluation order."""
        self._check_kind(kind)
        return self.db.list_rules(kind, active_only=active_only)

    def toggle_rule(self, kind: str, rule_id: int) -> bool:
        """Flip a rule's active flag. Returns the new state."""
        rule = self.get_rule(kind, rule_id)
        self.db.update_rule(kind, rule_id, active=not rule.active)
        return not rule.active

    def set_priority(self, kind: str, rule_id: int, priority: int) -> None:
        self.get_rule(kind, rule_id)
        self.db.update_rule(kind, rule_id, priority=priority)

    def update_priorities(self, kind: str, priorities: Sequence[tuple[int, int]]) -> None:
        """Apply several (rule_id, priority) pairs, e.g. after a drag-and-drop reorder.

        All rules are checked before any is updated.
        """
        for rule_id, _ in priorities:
            self.get_rule(kind, rule_id)
        for rule_id, priority in priorities:
            self.db.update_rule(kind, rule_id, priority=priority)

    def delete_rule(self, kind: str, rule_id: int) -> None:
        self.get_rule(kind, rule_id)
        self.db.delete_rule(kind, rule_id)

    def build_engine(self) -> RuleEngine:
        """Load the active rules into a RuleEngine (read fresh on every call)."""
        return RuleEngine(
            unit_rules=self.db.list_rules("unit", active_only=True),
            category_rules=self.db.list_rules("category", active_only=True),
        )

    def test_rules(
        self,
        description: str,
        source_category: Optional[str] = None,
        source_id: Optional[int] = None,
    ) -> Classification:
        """Show which unit and category the stored rules would assign."""
        return self.build_engine().classify(
            description, source_category=source_category, source_id=source_id
        )
