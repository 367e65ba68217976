"""Rule matching engine for auto-categorization.

Rules form a flat list evaluated in ascending priority order; the first
active rule whose pattern matches wins. Overlapping rules are resolved by
priority alone, never by how specific the pattern is.
"""

import logging
import re
from typing import Iterable, Mapping, Optional

from fintrack.domain.entities import Classification, Rule

logger = logging.getLogger(__name__)

MATCH_TYPES = ("contains", "exact", "starts_with", "regex")
UNIT_RULE_TYPES = ("description", "source")
CATEGORY_RULE_TYPES = ("description", "source_category")


def matches_pattern(value: Optional[str], pattern: str, match_type: str) -> bool:
    """Test a field value against a rule pattern.

    Matching is case-insensitive for every match type. An invalid regex or an
    unknown match type never matches.
    """
    value = value or ""
    lower_value = value.lower()
    lower_pattern = pattern.lower()

    if match_type == "contains":
        return lower_pattern in lower_value
    if match_type == "exact":
        return lower_value == lower_pattern
    if match_type == "starts_with":
        return lower_value.startswith(lower_pattern)
    if match_type == "regex":
        try:
            return re.search(pattern, value, re.IGNORECASE) is not None
        except re.error:
            logger.warning("Ignoring rule with invalid regex pattern %r", pattern)
            return False
    return False


def apply_rules(fields: Mapping[str, Optional[str]], rules: Iterable[Rule]) -> Optional[int]:
    """Return the target id of the first matching active rule.

    Args:
        fields: Candidate values keyed by rule type, e.g.
            {"description": "WALMART STORE", "source_category": "Groceries"}
        rules: Rules in any order; they are evaluated by ascending priority,
            ties keep their given order

    Returns:
        Target (unit or category) id, or None when no rule matches
    """
    for rule in sorted(rules, key=lambda r: r.priority):
        if not rule.active:
            continue
        if matches_pattern(fields.get(rule.rule_type), rule.pattern, rule.match_type):
            logger.debug("Rule %s (%r) matched -> %s", rule.id, rule.pattern, rule.target_id)
            return rule.target_id
    return None


class RuleEngine:
    """Unit and category rules evaluated together for one transaction."""

    def __init__(self, unit_rules: Iterable[Rule], category_rules: Iterable[Rule]):
        self.unit_rules = sorted(unit_rules, key=lambda r: r.priority)
        self.category_rules = sorted(category_rules, key=lambda r: r.priority)

    def classify(
        self,
        description: str,
        source_category: Optional[str] = None,
        source_id: Optional[int] = None,
    ) -> Classification:
        """Suggest a unit and a category for a transaction."""
        unit_id = apply_rules(
            {
                "description": description,
                "source": str(source_id) if source_id is not None else "",
            },
            self.unit_rules,
        )
        category_id = apply_rules(
            {"description": description, "source_category": source_category or ""},
            self.category_rules,
        )
        return Classification(unit_id=unit_id, category_id=category_id)
