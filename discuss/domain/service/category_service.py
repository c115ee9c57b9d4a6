"""Category domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from discuss.domain.error import ForbiddenError, NotFoundError, ValidationError
from discuss.domain.model import Category
from discuss.domain.repository import CategoryRepository
from discuss.domain.value import (
    ActivityAction,
    Actor,
    CategoryId,
    CategoryStatus,
    RequestOrigin,
    Role,
    Slug,
)

from .activity_recorder import ActivityRecorder
from .base import Service
from .slug import slugify


class CategoryService(Service):
    """Domain service for the category registry."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        activity_recorder: ActivityRecorder,
    ) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
            activity_recorder: Audit recorder
        """
        self.category_repository = category_repository
        self.activity_recorder = activity_recorder

    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if actor.role != Role.ADMIN:
            raise ForbiddenError("Only admins can manage categories")

    async def category_is_active(self, category_id: CategoryId) -> bool:
        """Whether new threads may be created in the category."""
        category = await self.category_repository.find_by_id(category_id)
        return category is not None and category.is_active

    async def list_categories(self) -> list[Category]:
        """Active categories ordered by name, with thread counts."""
        with logfire.span("category_service.list_categories"):
            return await self.category_repository.find_active()

    async def get_category(self, slug: str) -> Category:
        """Get a category by slug.

        Raises:
            NotFoundError: If no category has this slug
        """
        with logfire.span("category_service.get_category", slug=slug):
            try:
                parsed = Slug(slug)
            except ValueError:
                raise NotFoundError("Category", slug)

            category = await self.category_repository.find_by_slug(parsed)
            if category is None:
                raise NotFoundError("Category", slug)
            return category

    async def create_category(
        self,
        name: str,
        actor: Actor,
        description: Optional[str] = None,
        origin: Optional[RequestOrigin] = None,
    ) -> Category:
        """Create a category; the slug is derived from the name.

        Args:
            name: Unique display name
            actor: Must be an admin
            description: Optional description
            origin: Request origin for the audit entry

        Returns:
            Created category

        Raises:
            ForbiddenError: If the actor is not an admin
            ValidationError: If the name has no sluggable characters
            ConflictError: If the name or slug is taken
        """
        with logfire.span("category_service.create_category", name=name):
            self._require_admin(actor)

            slug = slugify(name)
            if not slug:
                raise ValidationError("Category name must contain letters or digits")

            category = await self.category_repository.create(
                Category(
                    id=CategoryId(uuid4()),
                    name=name.strip(),
                    slug=Slug(slug),
                    description=description,
                    status=CategoryStatus.ACTIVE,
                    created_by=actor.user_id,
                )
            )
            logfire.info("Category created", category_id=str(category.id), slug=slug)

            self.activity_recorder.record(
                actor.user_id,
                ActivityAction.CREATE_CATEGORY,
                resource=f"category:{category.id}",
                metadata={"name": category.name},
                origin=origin,
            )
            return category

    async def update_category(
        self,
        category_id: CategoryId,
        actor: Actor,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[CategoryStatus] = None,
        origin: Optional[RequestOrigin] = None,
    ) -> Category:
        """Update a category's name, description or status.

        Raises:
            ForbiddenError: If the actor is not an admin
            NotFoundError: If the category does not exist
            ConflictError: If the new name is taken
        """
        with logfire.span(
            "category_service.update_category", category_id=str(category_id)
        ):
            self._require_admin(actor)

            updated = await self.category_repository.update(
                category_id,
                name=name.strip() if name is not None else None,
                description=description,
                status=status,
            )
            if updated is None:
                raise NotFoundError("Category", str(category_id))

            changed = {
                k: v
                for k, v in {
                    "name": name,
                    "description": description,
                    "status": status.value if status else None,
                }.items()
                if v is not None
            }
            self.activity_recorder.record(
                actor.user_id,
                ActivityAction.UPDATE_CATEGORY,
                resource=f"category:{category_id}",
                metadata=changed,
                origin=origin,
            )
            return updated
