"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes. Unit and category rules live in separate tables
but share one domain Rule entity.
"""

from fintrack.domain import entities as domain
from fintrack.database.models import (
    Source as ORMSource,
    Unit as ORMUnit,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    UnitRule as ORMUnitRule,
    CategoryRule as ORMCategoryRule,
    ImportLog as ORMImportLog,
)


def source_to_domain(orm_source: ORMSource) -> domain.Source:
    """Convert SQLAlchemy Source model to domain Source entity."""
    return domain.Source(
        id=orm_source.id,
        name=orm_source.name,
        type=orm_source.type,
        created_at=orm_source.created_at,
    )


def unit_to_domain(orm_unit: ORMUnit) -> domain.Unit:
    """Convert SQLAlchemy Unit model to domain Unit entity."""
    return domain.Unit(
        id=orm_unit.id,
        name=orm_unit.name,
        color=orm_unit.color,
        description=orm_unit.description,
        active=orm_unit.active,
        created_at=orm_unit.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        parent_id=orm_category.parent_category_id,
        color=orm_category.color,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        source_id=orm_transaction.source_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        hash=orm_transaction.hash,
        unit_id=orm_transaction.unit_id,
        category_id=orm_transaction.category_id,
        source_category=orm_transaction.source_category,
        notes=orm_transaction.notes,
        created_at=orm_transaction.created_at,
    )


def unit_rule_to_domain(orm_rule: ORMUnitRule) -> domain.Rule:
    """Convert SQLAlchemy UnitRule model to domain Rule entity."""
    return domain.Rule(
        id=orm_rule.id,
        rule_type=orm_rule.rule_type,
        pattern=orm_rule.pattern,
        match_type=orm_rule.match_type,
        target_id=orm_rule.unit_id,
        priority=orm_rule.priority,
        active=orm_rule.active,
    )


def category_rule_to_domain(orm_rule: ORMCategoryRule) -> domain.Rule:
    """Convert SQLAlchemy CategoryRule model to domain Rule entity."""
    return domain.Rule(
        id=orm_rule.id,
        rule_type=orm_rule.rule_type,
        pattern=orm_rule.pattern,
        match_type=orm_rule.match_type,
        target_id=orm_rule.category_id,
        priority=orm_rule.priority,
        active=orm_rule.active,
    )


def import_log_to_domain(orm_log: ORMImportLog) -> domain.ImportLog:
    """Convert SQLAlchemy ImportLog model to domain ImportLog entity."""
    return domain.ImportLog(
        id=orm_log.id,
        source_id=orm_log.source_id,
        file_name=orm_log.file_name,
        transactions_added=orm_log.transactions_added,
        transactions_skipped=orm_log.transactions_skipped,
        status=orm_log.status,
        metadata=orm_log.metadata_json or {},
        created_at=orm_log.created_at,
    )
