"""Sources, units and categories: the reference data imports and rules point at."""

from typing import Optional

from fintrack.database.base import Database
from fintrack.domain import errors
from fintrack.domain.entities import Source, Unit, Category
from fintrack.domain.errors import NotFoundError, ValidationError

SOURCE_TYPES = ("bank", "credit_card", "manual")
DEFAULT_COLOR = "#6b7280"


class ReferenceService:
    """Service for managing sources, units and categories."""

    def __init__(self, db: Database):
        """Initialize reference data service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_source(self, name: str, source_type: str = "bank") -> int:
        """Create a source.

        Args:
            name: Source name (e.g., "Chase Checking")
            source_type: One of "bank", "credit_card", "manual"

        Returns:
            Source ID

        Raises:
            ValidationError: If name is blank or type is unknown
        """
        if not name or not name.strip():
            raise ValidationError("Source name is required")
        if source_type not in SOURCE_TYPES:
            raise ValidationError(errors.invalid_choice("source type", source_type, SOURCE_TYPES))
        return self.db.create_source(name=name.strip(), source_type=source_type)

    def get_source(self, source_id: int) -> Optional[Source]:
        return self.db.get_source(source_id)

    def require_source(self, source_id: int) -> Source:
        """Get a source or raise NotFoundError."""
        source = self.db.get_source(source_id)
        if source is None:
            raise NotFoundError(errors.source_not_found(source_id))
        return source

    def list_sources(self) -> list[Source]:
        return self.db.list_sources()

    def create_unit(
        self, name: str, color: str = DEFAULT_COLOR, description: Optional[str] = None
    ) -> int:
        """Create a budget unit. Returns unit ID."""
        if not name or not name.strip():
            raise ValidationError("Unit name is required")
        return self.db.create_unit(name=name.strip(), color=color, description=description)

    def list_units(self) -> list[Unit]:
        return self.db.list_units()

    def create_category(
        self, name: str, color: str = DEFAULT_COLOR, parent_id: Optional[int] = None
    ) -> int:
        """Create a category.

        Raises:
            ValidationError: If name is blank
            NotFoundError: If the parent category doesn't exist
        """
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        if parent_id is not None and self.db.get_category(parent_id) is None:
            raise NotFoundError(errors.category_not_found(parent_id))
        return self.db.create_category(name=name.strip(), color=color, parent_id=parent_id)

    def list_categories(self) -> list[Category]:
        return self.db.list_categories()
