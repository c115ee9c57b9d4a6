"""In-memory category repository for testing."""

from typing import Optional

from discuss.domain.error import ConflictError
from discuss.domain.model import Category
from discuss.domain.repository.category import CategoryRepository
from discuss.domain.repository.thread import ThreadRepository
from discuss.domain.value import CategoryId, CategoryStatus, Slug


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing.

    Thread counts are read from the paired thread repository.
    """

    def __init__(self, threads: ThreadRepository | None = None) -> None:
        self._categories: dict[CategoryId, Category] = {}
        self._threads = threads

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        return self._categories.get(category_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        for category in self._categories.values():
            if category.slug == slug:
                return category
        return None

    async def find_active(self) -> list[Category]:
        active = [c for c in self._categories.values() if c.is_active]
        active.sort(key=lambda c: c.name)
        if self._threads is None:
            return active
        return [
            c.evolve(thread_count=await self._threads.count(category_id=c.id))
            for c in active
        ]

    def _check_unique(self, category_id: CategoryId, name: str, slug: Slug) -> None:
        for other in self._categories.values():
            if other.id != category_id and (other.name == name or other.slug == slug):
                raise ConflictError("Category")

    async def create(self, category: Category) -> Category:
        self._check_unique(category.id, category.name, category.slug)
        self._categories[category.id] = category
        return category

    async def update(
        self,
        category_id: CategoryId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[CategoryStatus] = None,
    ) -> Optional[Category]:
        category = self._categories.get(category_id)
        if category is None:
            return None

        changes = {}
        if name is not None:
            self._check_unique(category_id, name, category.slug)
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        if status is not None:
            changes["status"] = status

        updated = category.evolve(**changes)
        self._categories[category_id] = updated
        return updated
