"""PostgreSQL implementation of Category repository."""

from typing import Any, Dict, List, Optional

import logfire
from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from discuss.domain.model import Category
from discuss.domain.repository.category import CategoryRepository
from discuss.domain.value import CategoryId, CategoryStatus, Slug
from discuss.persistence.error import metadata_errors
from discuss.persistence.mappers import row_to_category
from discuss.persistence.tables import categories_table, threads_table


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize repository.

        Args:
            session: Request-scoped session used for reads
            session_factory: Factory for autonomous write transactions
        """
        self.session = session
        self.session_factory = session_factory

    async def _find_one(self, *criteria) -> Optional[Category]:
        with metadata_errors("Category"):
            stmt = select(categories_table).where(*criteria)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_category(row._asdict()) if row else None

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        with logfire.span(
            "category_repository.find_by_id", category_id=str(category_id)
        ):
            return await self._find_one(categories_table.c.id == category_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug."""
        with logfire.span("category_repository.find_by_slug", slug=str(slug)):
            return await self._find_one(categories_table.c.slug == str(slug))

    async def find_active(self) -> List[Category]:
        """List active categories with their thread counts."""
        with (
            logfire.span("category_repository.find_active"),
            metadata_errors("Category"),
        ):
            thread_count = (
                select(func.count())
                .select_from(threads_table)
                .where(threads_table.c.category_id == categories_table.c.id)
                .scalar_subquery()
                .label("thread_count")
            )
            stmt = (
                select(categories_table, thread_count)
                .where(categories_table.c.status == CategoryStatus.ACTIVE.value)
                .order_by(categories_table.c.name)
            )
            result = await self.session.execute(stmt)
            categories = [row_to_category(row._asdict()) for row in result.fetchall()]

            logfire.info("Found categories", count=len(categories))
            return categories

    async def _write(self, stmt) -> Optional[Dict[str, Any]]:
        with metadata_errors("Category"):
            async with self.session_factory.begin() as session:
                result = await session.execute(stmt)
                row = result.fetchone()
                return row._asdict() if row else None

    async def create(self, category: Category) -> Category:
        """Insert a category."""
        with logfire.span(
            "category_repository.create", name=category.name, slug=str(category.slug)
        ):
            stmt = (
                insert(categories_table)
                .values(
                    id=category.id,
                    name=category.name,
                    slug=str(category.slug),
                    description=category.description,
                    status=category.status.value,
                    created_by=category.created_by,
                )
                .returning(categories_table)
            )
            row = await self._write(stmt)
            logfire.info("Category created", category_id=str(category.id))
            return row_to_category(row)

    async def update(
        self,
        category_id: CategoryId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[CategoryStatus] = None,
    ) -> Optional[Category]:
        """Update the given category fields."""
        with logfire.span(
            "category_repository.update", category_id=str(category_id)
        ):
            values: Dict[str, Any] = {"updated_at": func.now()}
            if name is not None:
                values["name"] = name
            if description is not None:
                values["description"] = description
            if status is not None:
                values["status"] = status.value

            stmt = (
                update(categories_table)
                .where(categories_table.c.id == category_id)
                .values(**values)
                .returning(categories_table)
            )
            row = await self._write(stmt)

            if row is None:
                logfire.warn("Category not found", category_id=str(category_id))
                return None

            return row_to_category(row)
