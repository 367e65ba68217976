"""SQLAlchemy models for fintrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    JSON,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Source(Base):
    """Bank account or card model."""

    __tablename__ = "sources"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="source")


class Unit(Base):
    """Budget unit model."""

    __tablename__ = "units"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    color = Column(String, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Category(Base):
    """Category model with hierarchical structure."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    parent_category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    color = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    source_id = Column(Integer, ForeignKey("sources.id"), nullable=False)
    unit_id = Column(Integer, ForeignKey("units.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    date = Column(String, nullable=False)  # ISO "YYYY-MM-DD"
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    source_category = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    hash = Column(String(16), nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    source = relationship("Source", back_populates="transactions")


class UnitRule(Base):
    """Rule assigning a unit by description or source."""

    __tablename__ = "unit_rules"

    id = Column(Integer, primary_key=True)
    rule_type = Column(String, nullable=False)
    pattern = Column(String, nullable=False)
    match_type = Column(String, nullable=False)
    unit_id = Column(Integer, ForeignKey("units.id"), nullable=False)
    priority = Column(Integer, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class CategoryRule(Base):
    """Rule assigning a category by description or bank category."""

    __tablename__ = "category_rules"

    id = Column(Integer, primary_key=True)
    rule_type = Column(String, nullable=False)
    pattern = Column(String, nullable=False)
    match_type = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    priority = Column(Integer, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class ImportLog(Base):
    """One CSV import request."""

    __tablename__ = "import_log"

    id = Column(Integer, primary_key=True)
    source_id = Column(Integer, ForeignKey("sources.id"), nullable=False)
    file_name = Column(String, nullable=True)
    transactions_added = Column(Integer, default=0, nullable=False)
    transactions_skipped = Column(Integer, default=0, nullable=False)
    status = Column(String, nullable=False)
    metadata_json = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
