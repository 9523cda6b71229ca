"""Category domain service."""

from typing import Optional
from tripledger.database.base import Database
from tripledger.domain.entities import Category


class CategoryService:
    """Service for looking up and creating a user's ledger categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, user_id: int, name: str, category_type: str = "expense") -> int:
        """Create a category.

        Args:
            user_id: Owner of the category
            name: Category name
            category_type: "expense" or "income"

        Returns:
            Category ID
        """
        return self.db.create_category(user_id=user_id, name=name, category_type=category_type)

    def list_categories(self, user_id: int) -> list[Category]:
        """List a user's categories ordered by name."""
        return self.db.list_categories(user_id)

    def find_by_name(self, user_id: int, *names: str) -> Optional[Category]:
        """Return the first category matching one of ``names``.

        Names are tried in order and compared case-insensitively, so callers
        can pass a preferred name followed by fallbacks.

        Args:
            user_id: Owner of the categories
            names: Candidate category names, most preferred first

        Returns:
            Category entity or None if no name matches
        """
        by_name = {cat.name.lower(): cat for cat in self.db.list_categories(user_id)}
        for name in names:
            match = by_name.get(name.lower())
            if match is not None:
                return match
        return None
