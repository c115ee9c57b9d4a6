"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from discuss.domain.model.category import Category
from discuss.domain.value import CategoryId, CategoryStatus, Slug


class CategoryRepository(ABC):
    """Repository for discussion categories (the category registry)."""

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug."""
        pass

    @abstractmethod
    async def find_active(self) -> List[Category]:
        """List active categories ordered by name, with thread counts."""
        pass

    @abstractmethod
    async def create(self, category: Category) -> Category:
        """Insert a category.

        Raises:
            ConflictError: If the name or slug is already taken
        """
        pass

    @abstractmethod
    async def update(
        self,
        category_id: CategoryId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[CategoryStatus] = None,
    ) -> Optional[Category]:
        """Update the given fields, leaving None fields unchanged.

        Returns:
            Updated category, or None if it does not exist
        """
        pass
